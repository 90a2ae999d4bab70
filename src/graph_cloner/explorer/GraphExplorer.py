"""Interprets a compiled pattern against an object graph.

The explorer keeps a working set of objects, starting with the root, and rewrites
it node by node:

- Name: ask the EntityExplorer to follow the relation from every object in the
  set; whatever comes back becomes the new set.
- Sequence: feed each step's output into the next step.
- Alternation: run every branch on the same input and merge the outputs. Steps
  after the alternation continue from the merged set.
- Group: run the inner expression.
- Repetition: run the inner expression again and again, each round starting
  from the objects first reached in the previous round, until a round reaches
  nothing new. The result is everything reached in any round.

Working sets compare objects by identity, so equal-but-distinct entities stay
separate, and they keep first-discovery order so traversal is deterministic.
"""

from __future__ import annotations

import functools
from typing import Any

from graph_cloner.explorer.EntityExplorer import EntityExplorer
from graph_cloner.pattern.compile_pattern import compile_pattern
from graph_cloner.pattern.Pattern import (
    Alternation,
    Group,
    Name,
    Pattern,
    Repetition,
    Sequence,
)
from graph_cloner.util.identity import IdentitySet


class GraphExplorer:
    """A reusable traversal for one pattern.

    Example:
        explorer = GraphExplorer("department+.(boss|employees)")
        reached = explorer.explore(company, cloner)
    """

    pattern: Pattern

    def __init__(self, pattern: str | Pattern) -> None:
        self.pattern = compile_pattern(pattern) if isinstance(pattern, str) else pattern

    def explore(self, root: Any, explorer: EntityExplorer) -> IdentitySet[Any]:
        """Walk the pattern from `root`, calling `explorer` for every relation it matches.

        Returns:
            The objects matched by the whole pattern.
        """
        if root is None:
            return IdentitySet()
        return self._apply(self.pattern, IdentitySet([root]), explorer)

    def _apply(
        self, node: Pattern, current: IdentitySet[Any], explorer: EntityExplorer
    ) -> IdentitySet[Any]:
        match node:
            case Name(name):
                found: IdentitySet[Any] = IdentitySet()
                for entity in current:
                    explored = explorer.explore(entity, name)
                    if explored:
                        found.update(o for o in explored if o is not None)
                return found
            case Sequence(steps):
                for step in steps:
                    if not current:
                        break
                    current = self._apply(step, current, explorer)
                return current
            case Alternation(branches):
                merged: IdentitySet[Any] = IdentitySet()
                for branch in branches:
                    merged |= self._apply(branch, current, explorer)
                return merged
            case Group(inner):
                return self._apply(inner, current, explorer)
            case Repetition(inner):
                return self._fixed_point(inner, current, explorer)
            case _:
                raise TypeError(f"Not a pattern node: {node!r}")

    def _fixed_point(
        self, inner: Pattern, start: IdentitySet[Any], explorer: EntityExplorer
    ) -> IdentitySet[Any]:
        reached: IdentitySet[Any] = IdentitySet()
        frontier = start
        while frontier:
            produced = self._apply(inner, frontier, explorer)
            frontier = IdentitySet(o for o in produced if o not in reached)
            reached |= frontier
        return reached

    def __repr__(self) -> str:
        return f"GraphExplorer({str(self.pattern)!r})"


@functools.cache
def get_graph_explorer(source: str) -> GraphExplorer:
    """Return the shared GraphExplorer for a pattern string."""
    return GraphExplorer(compile_pattern(source))
