"""Compiled pattern expressions.

A pattern names which relations to follow from a root object:

    "department+.(boss|employees).address"

Nodes are frozen dataclasses, so a compiled pattern can be shared freely between
threads and cached for the lifetime of the process. `str(node)` gives back a
canonical source string that compiles to an equal tree.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Name:
    """A single relation name, or "key" / "value" on a map entry."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Sequence:
    """Steps applied one after another: "a.b.c"."""

    steps: tuple[Pattern, ...]

    def __str__(self) -> str:
        return ".".join(_render(step, Sequence) for step in self.steps)


@dataclass(frozen=True, slots=True)
class Alternation:
    """Branches applied to the same input: "a|b"."""

    branches: tuple[Pattern, ...]

    def __str__(self) -> str:
        return "|".join(str(branch) for branch in self.branches)


@dataclass(frozen=True, slots=True)
class Group:
    """A parenthesized sub-expression: "(a|b)"."""

    inner: Pattern

    def __str__(self) -> str:
        return f"({self.inner})"


@dataclass(frozen=True, slots=True)
class Repetition:
    """One or more applications of `inner`, up to its fixed point: "a+"."""

    inner: Pattern

    def __str__(self) -> str:
        return f"{_render(self.inner, Repetition)}+"


type Pattern = Name | Sequence | Alternation | Group | Repetition


def _render(node: Pattern, parent: type) -> str:
    # Groups already carry their parentheses; bare alternations inside a sequence
    # and bare compound nodes under "+" need them added back.
    if isinstance(node, Alternation) or (
        parent is Repetition and isinstance(node, Sequence)
    ):
        return f"({node})"
    return str(node)
