"""AST data classes for parsed boolean queries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Term:
    """A bare word, wildcard word (``soft*``) or quoted phrase.

    Inside a quoted phrase ``*`` is an ordinary character.
    """

    value: str
    quoted: bool = False

    def __str__(self) -> str:
        if self.quoted or self.value.upper() in ("AND", "OR", "NOT"):
            return f'"{self.value}"'
        return self.value


@dataclass(frozen=True)
class And:
    """Both children must match."""

    left: Node
    right: Node

    def __str__(self) -> str:
        return f"({self.left} AND {self.right})"


@dataclass(frozen=True)
class Or:
    """At least one child must match."""

    left: Node
    right: Node

    def __str__(self) -> str:
        return f"({self.left} OR {self.right})"


@dataclass(frozen=True)
class Not:
    """The operand must not match."""

    operand: Node

    def __str__(self) -> str:
        return f"NOT {self.operand}"


Node = Term | And | Or | Not
