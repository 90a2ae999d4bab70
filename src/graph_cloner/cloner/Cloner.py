"""Cloner - one clone session over an object graph.

A Cloner is the EntityExplorer that GraphExplorer and deep_explore drive. Every
time a traversal follows a relation, the Cloner makes sure the owner has a clone,
clones whatever the relation points at, and writes the cloned value onto the
owner's clone. Traversal then continues from the *original* targets.

Two caches make this safe on arbitrary graphs:

- the identity map (original -> clone) guarantees one clone per original, no
  matter how many paths lead to it;
- the explored cache remembers what each (original, relation) pair produced, so
  overlapping patterns and repetition rounds do the work only once.

A clone is registered in the identity map as soon as it is constructed and its
scalars are copied, before any of its relations are touched. Cycles therefore
resolve to the already-registered clone instead of recursing.

Relations that no pattern reaches (and, for deep clones, that the filter does
not approve) keep whatever default the blank instance was constructed with.

A Cloner instance is NOT thread safe. The functions in graph_cloner.cloner.api
create a fresh one per call and are.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping, Set
from collections.abc import Sequence as SequenceABC
from types import MappingProxyType
from typing import Any

from sortedcontainers import SortedDict, SortedList, SortedSet

from graph_cloner.cloner.PropertyFilter import PropertyFilter, allow_all
from graph_cloner.errors import UnsupportedContainerKindError
from graph_cloner.explorer.deep_explore import deep_explore
from graph_cloner.explorer.GraphExplorer import GraphExplorer, get_graph_explorer
from graph_cloner.explorer.MapEntry import MapEntry
from graph_cloner.introspect.DataclassIntrospector import default_introspector
from graph_cloner.introspect.Introspector import Introspector
from graph_cloner.pattern.Pattern import Pattern
from graph_cloner.util.identity import IdentityDict, IdentitySet


class Cloner:
    property_filter: PropertyFilter
    introspector: Introspector
    _original_to_clone: IdentityDict[Any, Any]
    _explored: dict[tuple[int, str], tuple[Any, Collection[Any] | None]]
    _visited: IdentitySet[Any]

    def __init__(
        self,
        property_filter: PropertyFilter = allow_all,
        introspector: Introspector | None = None,
    ) -> None:
        self.property_filter = property_filter
        self.introspector = introspector if introspector is not None else default_introspector
        self._original_to_clone = IdentityDict()
        # Keyed by id(); the original is kept in the value so the id stays valid.
        self._explored = {}
        self._visited = IdentitySet()

    @property
    def identity_map(self) -> Mapping[Any, Any]:
        """Read-only view of every original cloned so far, mapped to its clone."""
        return MappingProxyType(self._original_to_clone)  # type: ignore[arg-type]

    def clone_of(self, original: Any) -> Any | None:
        """Return the clone already made for `original`, or None."""
        return self._original_to_clone.get(original)

    def clone[T](self, root: T, *patterns: str | Pattern) -> T:
        """Clone `root` plus every relation matched by `patterns`.

        Scalars of each cloned object are copied when the property filter
        approves them. Relations not named by any pattern stay unset.
        """
        for pattern in patterns:
            explorer = (
                get_graph_explorer(pattern) if isinstance(pattern, str) else GraphExplorer(pattern)
            )
            explorer.explore(root, self)
        return self.get_clone(root)

    def deep_clone[T](self, root: T) -> T:
        """Clone `root` plus every relation the property filter approves, to any depth.

        Objects explored by earlier deep_clone calls on this Cloner are not
        explored again, so a batch of roots shares the work.
        """
        deep_explore(root, self._visited, self, self.introspector, self.property_filter)
        return self.get_clone(root)

    def get_clone(self, original: Any) -> Any:
        """Return the clone of `original`, creating it on first request.

        Values that are not cloneable (None, numbers, strings, frozen
        dataclasses...) are returned unchanged.

        Raises:
            InstantiationError: If a blank instance cannot be constructed.
        """
        if original is None:
            return None
        try:
            return self._original_to_clone[original]
        except KeyError:
            pass
        info = self.introspector.get_class_info(original)
        if info is None:
            return original
        clone = self.introspector.construct(info, original)
        for name in info.scalars:
            if self.property_filter(original, name):
                self.introspector.set(clone, name, self.introspector.get(original, name))
        self._original_to_clone[original] = clone
        return clone

    def explore(self, entity: Any, relation: str) -> Collection[Any] | None:
        """Clone one relation of `entity` and return the original objects behind it.

        The result for each (entity, relation) pair is computed once per session.

        Raises:
            UnsupportedPropertyError: If `entity` is a MapEntry and `relation` is
                neither "key" nor "value".
            UnsupportedContainerKindError: If the relation holds a container that
                cannot be rebuilt.
        """
        if entity is None:
            return None
        key = (id(entity), relation)
        cached = self._explored.get(key)
        if cached is not None:
            return cached[1]
        explored = self._explore_and_clone(entity, relation)
        self._explored[key] = (entity, explored)
        return explored

    def _explore_and_clone(self, entity: Any, relation: str) -> Collection[Any] | None:
        if isinstance(entity, MapEntry):
            return (entity.component(relation),)

        info = self.introspector.get_class_info(entity)
        if info is None or relation not in info.relations:
            return None

        owner = self.get_clone(entity)
        value = self.introspector.get(entity, relation)
        if value is None:
            return None

        cloned_value, explored = self._clone_value(value, relation, owner, info.inverse_of(relation))
        self.introspector.set(owner, relation, cloned_value)
        return explored

    def _clone_value(
        self, value: Any, relation: str, owner: Any, inverse: str | None
    ) -> tuple[Any, Collection[Any]]:
        """Rebuild a relation value as a fresh container of the same kind.

        Returns:
            (cloned value, original objects reached through it)
        """
        if self.introspector.get_class_info(value) is not None:
            return self.get_clone(value), (value,)

        match value:
            case SortedSet():
                return SortedSet(self._clone_targets(value, owner, inverse), key=value.key), value
            case SortedDict():
                entries = [MapEntry(k, v) for k, v in value.items()]
                return SortedDict(value.key, self._clone_entries(entries, owner, inverse)), entries
            case str() | bytes() | bytearray() | SortedList():
                raise UnsupportedContainerKindError(value, relation)
            case tuple():
                cloned = self._clone_targets(value, owner, inverse)
                # NamedTuples rebuild through _make to keep their type.
                if hasattr(type(value), "_make"):
                    return type(value)._make(cloned), value
                return tuple(cloned), value
            case frozenset():
                return frozenset(self._clone_targets(value, owner, inverse)), value
            case Set():
                return set(self._clone_targets(value, owner, inverse)), value
            case Mapping():
                entries = [MapEntry(k, v) for k, v in value.items()]
                return dict(self._clone_entries(entries, owner, inverse)), entries
            case SequenceABC():
                return list(self._clone_targets(value, owner, inverse)), value
            case Collection():
                raise UnsupportedContainerKindError(value, relation)
            case _:
                # Singular relation to something that is not cloneable: shared.
                return value, (value,)

    def _clone_targets(self, targets: Iterable[Any], owner: Any, inverse: str | None) -> Iterator[Any]:
        for original in targets:
            yield self._clone_owned(original, owner, inverse)

    def _clone_entries(
        self, entries: Iterable[MapEntry], owner: Any, inverse: str | None
    ) -> Iterator[tuple[Any, Any]]:
        for entry in entries:
            yield self.get_clone(entry.key), self._clone_owned(entry.value, owner, inverse)

    def _clone_owned(self, original: Any, owner: Any, inverse: str | None) -> Any:
        cloned = self.get_clone(original)
        if inverse is not None and cloned is not original:
            self.introspector.set(cloned, inverse, owner)
        return cloned
