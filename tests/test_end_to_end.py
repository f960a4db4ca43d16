"""End-to-end tests: KFG source in, plain Python values out."""

import os
import tempfile

import pytest

import kfg
from kfg import loads, load, parse_source, ParseError, KfgError


SAMPLE = b"""\
// Application settings
name = 'demo app'
version = 1.2
debug = false
ports = [80, 443]

/* connection pool,
   shared by all workers */
database:: primary:: host = 'db1.local'
database:: primary:: port = 5432

limits = {
  .cpu: 0.5
  .memory: 512
  .tags: ['a' 'b']
}
"""


def test_sample_file():
    assert loads(SAMPLE) == {
        "name": "demo app",
        "version": 1.2,
        "debug": False,
        "ports": [80, 443],
        "database": {"primary": {"host": "db1.local", "port": 5432}},
        "limits": {"cpu": 0.5, "memory": 512, "tags": ["a", "b"]},
    }


def test_loads_accepts_str():
    assert loads("x = 'hi'") == {"x": "hi"}


def test_parse_source_returns_ast():
    ast = parse_source("x = 1")
    assert ast.assignments == {"x": kfg.Integer(1)}


def test_options_pass_through():
    with pytest.raises(ParseError):
        loads("x = [null]", strict=True)
    assert loads("a:: x = 1\ny = 2", sticky_scopes=True) == {"a": {"x": 1, "y": 2}}


def test_load_reads_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "app.kfg")
        with open(path, "wb") as f:
            f.write(SAMPLE)
        assert load(path)["database"]["primary"]["port"] == 5432


def test_load_missing_file():
    with pytest.raises(FileNotFoundError):
        load("/nonexistent/app.kfg")


def test_parse_error_is_kfg_error():
    with pytest.raises(KfgError):
        loads("x = 'open")


def test_windows_line_endings():
    assert loads(b"x = 1\r\ny = 2\r\n") == {"x": 1, "y": 2}


def test_example_file():
    here = os.path.dirname(os.path.abspath(__file__))
    config = load(os.path.join(here, "..", "examples", "app.kfg"))
    assert config["name"] == "demo service"
    assert config["listen"]["ports"] == [8080, 8443]
    assert config["database"] == {
        "primary": {"host": "db1.internal", "port": 5432},
        "replicas": ["db2.internal", "db3.internal"],
    }
