"""KFG CLI — kfg check, kfg dump, kfg tokens."""
import json
import os
import sys

from kfg.lexer import tokenize, filter_tokens
from kfg.parser import Parser
from kfg.config import get_config, parser_options
from kfg.errors import KfgError
from kfg.log import Printer


def main():
    if len(sys.argv) < 2:
        print("Usage: kfg <command> <file.kfg>", file=sys.stderr)
        print("Commands: check, dump, tokens", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command not in ("check", "dump", "tokens"):
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    if len(sys.argv) < 3:
        print(f"Usage: kfg {command} <file.kfg>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[2]
    debug = "DEBUG" in os.environ
    try:
        config = get_config()
    except KfgError as e:
        Printer(color=False, debug=debug).error(str(e))
        sys.exit(1)
    out = Printer(color=config["output"]["color"], debug=debug)
    out.debug("DEBUG MODE")

    out.info("Reading", filepath)
    try:
        with open(filepath, "rb") as f:
            buffer = f.read()
    except OSError as e:
        out.error(f"cannot read {filepath}: {e.strerror or e}")
        sys.exit(1)

    out.info("Tokenizing", filepath)
    tokens = tokenize(buffer)
    out.tokens(tokens)

    out.info("Lexing", filepath)
    tokens = filter_tokens(tokens)
    out.tokens(tokens)

    if command == "tokens":
        for tok in tokens:
            print(f"{tok.type.name} {tok.value!r} {tok.position}")
        sys.exit(0)

    out.info("Parsing", filepath)
    parser = Parser(tokens, **parser_options(config))
    try:
        tree = parser.parse()
    except KfgError as e:
        out.error(str(e))
        sys.exit(1)

    for skipped in parser.skipped:
        out.debug(f"dropped value: {skipped}")
    out.debug(tree.render(color=out.color))

    if command == "check":
        print(f"OK: {filepath}")
        sys.exit(0)

    print(json.dumps(tree.to_python(), indent=2))
    sys.exit(0)


if __name__ == "__main__":
    main()
