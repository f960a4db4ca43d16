"""KFG MCP Server — exposes the KFG parser as tools over the MCP protocol."""

import json
import os

from mcp.server.fastmcp import FastMCP

from kfg.lexer import lex
from kfg.parser import Parser
from kfg.errors import KfgError

mcp = FastMCP("kfg")


def _read_source(filepath: str) -> bytes:
    with open(filepath, "rb") as f:
        return f.read()


@mcp.tool()
def kfg_write(filepath: str, source: str) -> str:
    """Write KFG source to a file. Use this to create new .kfg config files.

    Args:
        filepath: Path to the .kfg file to create (e.g. "app.kfg")
        source: The KFG source text to write
    """
    return write_kfg_file(filepath, source)


def write_kfg_file(filepath: str, source: str) -> str:
    """Core logic for writing a kfg file — testable without MCP."""
    if not filepath.endswith(".kfg"):
        return "Error: filepath must end with .kfg"
    try:
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        with open(filepath, "w") as f:
            f.write(source)
        return f"Saved: {filepath}"
    except OSError as e:
        return f"Error writing file: {e}"


@mcp.tool()
def kfg_check(filepath: str) -> str:
    """Check KFG syntax. Reports the first error with its line:column-length position.

    Args:
        filepath: Path to the .kfg file to check
    """
    return check_kfg_file(filepath)


def check_kfg_file(filepath: str) -> str:
    """Core logic for checking a kfg file — testable without MCP."""
    try:
        source = _read_source(filepath)
    except FileNotFoundError:
        return f"Error: file not found: {filepath}"
    except OSError as e:
        return f"Error reading file: {e}"

    try:
        Parser(lex(source)).parse()
        return f"OK: {filepath}"
    except KfgError as e:
        return f"Error: {e}"


@mcp.tool()
def kfg_parse(filepath: str, strict: bool = False, sticky_scopes: bool = False) -> str:
    """Parse a KFG file and return its assignments as JSON.

    Args:
        filepath: Path to the .kfg file to parse
        strict: Fail on array/dict values that are not valid scalars instead of dropping them
        sticky_scopes: Keep every ``name::`` scope active for the rest of the file
    """
    return parse_kfg_file(filepath, strict=strict, sticky_scopes=sticky_scopes)


def parse_kfg_file(filepath: str, strict: bool = False, sticky_scopes: bool = False) -> str:
    """Core logic for parsing a kfg file to JSON — testable without MCP."""
    try:
        source = _read_source(filepath)
    except FileNotFoundError:
        return f"Error: file not found: {filepath}"
    except OSError as e:
        return f"Error reading file: {e}"

    try:
        tree = Parser(lex(source), strict=strict, sticky_scopes=sticky_scopes).parse()
    except KfgError as e:
        return f"Error: {e}"
    return json.dumps(tree.to_python(), indent=2)


@mcp.tool()
def kfg_tokens(filepath: str) -> str:
    """List the tokens the parser sees for a KFG file, one per line.

    Args:
        filepath: Path to the .kfg file to tokenize
    """
    return tokens_kfg_file(filepath)


def tokens_kfg_file(filepath: str) -> str:
    """Core logic for listing tokens — testable without MCP."""
    try:
        source = _read_source(filepath)
    except FileNotFoundError:
        return f"Error: file not found: {filepath}"
    except OSError as e:
        return f"Error reading file: {e}"

    lines = [f"{tok.type.name} {tok.value!r} {tok.position}" for tok in lex(source)]
    return "\n".join(lines) if lines else "(no tokens)"


KFG_LANGUAGE_GUIDE = """\
# Writing KFG Files

KFG is a small configuration language. A file is a list of assignments.
Spaces and comments are ignored.

## Scalars
```
name = 'kfg'
port = 8080
mask = 0xff
ratio = 0.75
debug = true
```

## Arrays (commas optional)
```
ports = [80 443]
hosts = ['a', 'b', 'c']
```

## Dictionaries
```
server = {
  .host: 'localhost'
  .port: 8080
}
```

## Scopes
```
database:: primary:: host = 'db1'
```
is the same as `database = {.primary: {.host: 'db1'}}`.

## Comments
```
// to end of line
/* across
   lines */
```

## Important Rules
1. Strings use single quotes only: 'hello' (not "hello")
2. Floats are written without spaces around the dot: 1.5
3. Booleans are lowercase: true, false
4. Dictionary keys start with a dot and end with a colon: .key: value
5. Scopes cannot be declared inside dictionaries
6. Files must end with .kfg extension
"""


@mcp.prompt()
def kfg_guide() -> str:
    """Complete guide to writing KFG files. Use this when writing .kfg files."""
    return KFG_LANGUAGE_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
