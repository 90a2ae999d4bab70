"""Containers keyed by object identity rather than equality.

Entities in an object graph may define `__eq__` in terms of their fields (plain
dataclasses do) or may not be hashable at all. Cloning has to treat two equal
but distinct objects as two different nodes, so every bookkeeping structure in
the cloner is keyed by `id()` instead.

Both containers keep a strong reference to their keys so an `id()` can never be
reused by another object while it is still present.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableMapping, MutableSet
from typing import Any


class IdentityDict[K, V](MutableMapping[K, V]):
    """Insertion-ordered mapping that compares keys with `is`."""

    _items: dict[int, tuple[K, V]]

    def __init__(self, items: Iterable[tuple[K, V]] = ()) -> None:
        self._items = {}
        for key, value in items:
            self[key] = value

    def __getitem__(self, key: K) -> V:
        try:
            return self._items[id(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: K, value: V) -> None:
        self._items[id(key)] = (key, value)

    def __delitem__(self, key: K) -> None:
        try:
            del self._items[id(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return id(key) in self._items

    def __iter__(self) -> Iterator[K]:
        return (key for key, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self._items.values())
        return f"{type(self).__name__}({{{pairs}}})"


class IdentitySet[T](MutableSet[T]):
    """Insertion-ordered set that compares members with `is`."""

    _members: dict[int, T]

    def __init__(self, members: Iterable[T] = ()) -> None:
        self._members = {}
        self.update(members)

    def __contains__(self, member: object) -> bool:
        return id(member) in self._members

    def __iter__(self) -> Iterator[T]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def add(self, member: T) -> None:
        self._members.setdefault(id(member), member)

    def discard(self, member: T) -> None:
        self._members.pop(id(member), None)

    def update(self, members: Iterable[T]) -> None:
        for member in members:
            self.add(member)

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> IdentitySet[Any]:
        # Used by the MutableSet mixins (`|`, `&`, `-`) to build results.
        return cls(it)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._members.values())!r})"
