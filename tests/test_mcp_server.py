"""Tests for the KFG MCP server tools."""

import json
import os
import tempfile
from kfg_mcp.server import (
    write_kfg_file,
    check_kfg_file,
    parse_kfg_file,
    tokens_kfg_file,
    KFG_LANGUAGE_GUIDE,
)


def _write(tmpdir: str, source: str) -> str:
    filepath = os.path.join(tmpdir, "test.kfg")
    with open(filepath, "w") as f:
        f.write(source)
    return filepath


def test_write_kfg_file_creates_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = os.path.join(tmpdir, "test.kfg")
        result = write_kfg_file(filepath, "x = 1")
        assert "Saved" in result
        with open(filepath) as f:
            assert f.read() == "x = 1"


def test_write_kfg_file_creates_directories():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = os.path.join(tmpdir, "sub", "dir", "test.kfg")
        result = write_kfg_file(filepath, "x = 1")
        assert "Saved" in result
        assert os.path.exists(filepath)


def test_write_kfg_file_rejects_other_extensions():
    result = write_kfg_file("/tmp/test.yaml", "x = 1")
    assert "Error" in result


def test_check_valid_kfg():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, "name = 'World'\nports = [1 2]")
        assert check_kfg_file(filepath) == f"OK: {filepath}"


def test_check_invalid_kfg():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, ".x = 1")
        result = check_kfg_file(filepath)
        assert result.startswith("Error:")
        assert "1:0-1" in result


def test_check_missing_file():
    result = check_kfg_file("/nonexistent/file.kfg")
    assert "Error" in result


def test_parse_returns_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, "x = {.a: 1.5}\ny = 'b'")
        assert json.loads(parse_kfg_file(filepath)) == {"x": {"a": 1.5}, "y": "b"}


def test_parse_strict():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, "x = [1 nope]")
        assert json.loads(parse_kfg_file(filepath)) == {"x": [1]}
        assert "not a number" in parse_kfg_file(filepath, strict=True)


def test_parse_sticky_scopes():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, "a:: x = 1\ny = 2")
        result = json.loads(parse_kfg_file(filepath, sticky_scopes=True))
        assert result == {"a": {"x": 1, "y": 2}}


def test_parse_missing_file():
    assert "Error" in parse_kfg_file("/nonexistent/file.kfg")


def test_tokens_listing():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, "x = 1")
        assert tokens_kfg_file(filepath).splitlines() == [
            "SYMBOL 'x' 1:0-1",
            "EQUALS '=' 1:2-1",
            "SYMBOL '1' 1:4-1",
        ]


def test_tokens_empty_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = _write(tmpdir, "// only a comment")
        assert tokens_kfg_file(filepath) == "(no tokens)"


def test_language_guide_mentions_scopes():
    assert "::" in KFG_LANGUAGE_GUIDE
