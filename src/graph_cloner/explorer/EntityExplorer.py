"""The capability that graph traversal drives at every relation it follows."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Protocol


class EntityExplorer(Protocol):
    """Something that can be asked to follow one relation of one object.

    `explore` returns the objects found behind the relation (a single-element
    collection for a singular relation, the entries for a map relation), or
    None when there is nothing to follow. Traversal continues from whatever is
    returned, so an implementation decides what "reachable" means.
    """

    def explore(self, entity: Any, relation: str) -> Collection[Any] | None: ...
