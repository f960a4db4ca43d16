"""KFG AST node definitions.

Every value the parser produces is one of a closed set of dataclasses:
``String``, ``Integer``, ``Float``, ``Bool``, ``Array`` and ``Dict``.
``Null`` exists only as the zero value; a parsed file never contains one.
The ``Ast`` container maps top-level names to these nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ── ANSI colors for debug rendering ─────────────────────────────────────────

RESET = "\033[m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass
class Node:
    """Base class for every AST value node."""

    def to_python(self) -> Any:
        raise NotImplementedError

    def render(self, color: bool = False) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


# ── Scalars ─────────────────────────────────────────────────────────────────

@dataclass
class String(Node):
    value: str = ""

    def to_python(self) -> str:
        return self.value

    def render(self, color: bool = False) -> str:
        return _paint(f'"{self.value}"', GREEN, color)


@dataclass
class Integer(Node):
    value: int = 0

    def to_python(self) -> int:
        return self.value

    def render(self, color: bool = False) -> str:
        return _paint(str(self.value), YELLOW, color)


@dataclass
class Float(Node):
    value: float = 0.0

    def to_python(self) -> float:
        return self.value

    def render(self, color: bool = False) -> str:
        return _paint(repr(self.value), YELLOW, color)


@dataclass
class Bool(Node):
    value: bool = False

    def to_python(self) -> bool:
        return self.value

    def render(self, color: bool = False) -> str:
        return _paint("true" if self.value else "false", BLUE, color)


@dataclass
class Null(Node):
    def to_python(self) -> None:
        return None

    def render(self, color: bool = False) -> str:
        return _paint("null", RED, color)


# ── Containers ──────────────────────────────────────────────────────────────

@dataclass
class Array(Node):
    elements: list[Node] = field(default_factory=list)

    def to_python(self) -> list:
        return [element.to_python() for element in self.elements]

    def render(self, color: bool = False) -> str:
        return "[" + ", ".join(element.render(color) for element in self.elements) + "]"


@dataclass
class Dict(Node):
    entries: dict[str, Node] = field(default_factory=dict)

    def to_python(self) -> dict:
        return {key: value.to_python() for key, value in self.entries.items()}

    def render(self, color: bool = False) -> str:
        inner = ", ".join(f"{key}: {value.render(color)}" for key, value in self.entries.items())
        return "{" + inner + "}"

    def merge(self, other: Dict) -> None:
        """Fold *other* into this dict, recursing where both sides hold a Dict."""
        for key, value in other.entries.items():
            existing = self.entries.get(key)
            if isinstance(existing, Dict) and isinstance(value, Dict):
                existing.merge(value)
            else:
                self.entries[key] = value


# ── Ast ─────────────────────────────────────────────────────────────────────

@dataclass
class Ast:
    """A parsed KFG file: top-level names bound to value nodes."""
    assignments: dict[str, Node] = field(default_factory=dict)

    def to_python(self) -> dict:
        return {name: node.to_python() for name, node in self.assignments.items()}

    def render(self, color: bool = False) -> str:
        """Debug view, one ``name = value`` line per assignment."""
        if not self.assignments:
            return "{}"
        lines = [f"  {name} = {node.render(color)}" for name, node in self.assignments.items()]
        return "{\n" + "\n".join(lines) + "\n}"

    def __len__(self) -> int:
        return len(self.assignments)

    def __str__(self) -> str:
        return self.render()
