# tests/test_cli.py
import json
import subprocess
import sys
import os
import tempfile

KFG_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def run_kfg(args: list[str], debug: bool = False, cwd: str = KFG_DIR) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env.pop("DEBUG", None)
    env["PYTHONPATH"] = KFG_DIR
    if debug:
        env["DEBUG"] = "1"
    return subprocess.run(
        [sys.executable, "-m", "kfg.cli"] + args,
        capture_output=True, text=True, cwd=cwd, env=env,
    )


def write_kfg(source: str) -> str:
    with tempfile.NamedTemporaryFile(suffix=".kfg", mode="w", delete=False) as f:
        f.write(source)
    return f.name


def test_kfg_no_args():
    result = run_kfg([])
    assert result.returncode != 0
    assert "usage" in result.stderr.lower()


def test_kfg_unknown_command():
    result = run_kfg(["foobar", "x.kfg"])
    assert result.returncode != 0
    assert "Unknown command" in result.stderr


def test_kfg_check_no_file_arg():
    result = run_kfg(["check"])
    assert result.returncode != 0


def test_kfg_check_valid():
    path = write_kfg("name = 'kfg'\nport = 8080\n")
    result = run_kfg(["check", path])
    os.unlink(path)
    assert result.returncode == 0
    assert "OK" in result.stdout
    assert "Parsing" in result.stderr


def test_kfg_check_invalid():
    path = write_kfg("x = 'unterminated")
    result = run_kfg(["check", path])
    os.unlink(path)
    assert result.returncode == 1
    assert "Unclosed string" in result.stderr
    assert "OK" not in result.stdout


def test_kfg_check_missing_file():
    result = run_kfg(["check", "/nonexistent/file.kfg"])
    assert result.returncode == 1
    assert "cannot read" in result.stderr


def test_kfg_dump_json():
    path = write_kfg("a:: b = [1 2]\nc = {.d: true}\n")
    result = run_kfg(["dump", path])
    os.unlink(path)
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"a": {"b": [1, 2]}, "c": {"d": True}}


def test_kfg_tokens():
    path = write_kfg("x = 1 // comment\n")
    result = run_kfg(["tokens", path])
    os.unlink(path)
    assert result.returncode == 0
    assert result.stdout.splitlines() == [
        "SYMBOL 'x' 1:0-1",
        "EQUALS '=' 1:2-1",
        "SYMBOL '1' 1:4-1",
    ]


def test_kfg_debug_env():
    path = write_kfg("x = 1\n")
    result = run_kfg(["check", path], debug=True)
    os.unlink(path)
    assert result.returncode == 0
    assert "DEBUG" in result.stderr
    assert "SYMBOL" in result.stderr


def test_kfg_no_debug_output_by_default():
    path = write_kfg("x = 1\n")
    result = run_kfg(["check", path])
    os.unlink(path)
    assert "DEBUG" not in result.stderr


def run_with_config(config_text: str, source: str) -> subprocess.CompletedProcess:
    with tempfile.TemporaryDirectory() as tmpdir:
        with open(os.path.join(tmpdir, "kfg.config"), "w") as f:
            f.write(config_text)
        path = os.path.join(tmpdir, "app.kfg")
        with open(path, "w") as f:
            f.write(source)
        return run_kfg(["check", path], cwd=tmpdir)


def test_kfg_malformed_config():
    result = run_with_config("parser: [unclosed\n", "x = 1\n")
    assert result.returncode == 1
    assert "ERROR" in result.stderr
    assert "Invalid kfg.config" in result.stderr
    assert "Traceback" not in result.stderr


def test_kfg_non_bool_config_option():
    result = run_with_config("parser:\n  strict: maybe\n", "x = 1\n")
    assert result.returncode == 1
    assert "parser.strict" in result.stderr
    assert "Traceback" not in result.stderr


def test_kfg_null_config_section():
    result = run_with_config("output: null\nparser: 3\n", "x = 1\n")
    assert result.returncode == 0
    assert "OK" in result.stdout


def test_kfg_strict_config():
    result = run_with_config("parser:\n  strict: true\n", "x = [1 null]\n")
    assert result.returncode == 1
    assert "not a number" in result.stderr
