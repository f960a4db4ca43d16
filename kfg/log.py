"""Prefixed INFO/DEBUG/ERROR output for the KFG command line.

The parsing core never writes anywhere; callers hand a Printer whatever
they want shown.
"""

import sys

from kfg.ast_nodes import RESET, RED, GREEN, YELLOW

MAGENTA = "\033[35m"
CYAN = "\033[36m"


class Printer:
    def __init__(self, stream=None, color: bool = True, debug: bool = False):
        self.stream = stream if stream is not None else sys.stderr
        self.color = color
        self.debug_enabled = debug

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.color else text

    def _write(self, label: str, color: str, message: str) -> None:
        print(f"{self._paint(label, color)} :: {message}", file=self.stream)

    def info(self, message: str, file: str | None = None) -> None:
        if file is not None:
            message = f"{message} '{self._paint(file, YELLOW)}'"
        self._write("INFO", GREEN, message)

    def error(self, message: str) -> None:
        self._write("ERROR", RED, message)

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self._write("DEBUG", MAGENTA, message)

    def tokens(self, tokens: list) -> None:
        """One debug line per token: type, value, position."""
        for tok in tokens:
            self.debug(
                f"{self._paint(tok.type.name, CYAN)} {self._paint(repr(tok.value), YELLOW)} at {tok.position}"
            )
