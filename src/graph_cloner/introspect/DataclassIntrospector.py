"""Default Introspector for plain dataclasses.

Relations are declared with `relation()` in place of `field()`; every other
dataclass field is a scalar. Frozen dataclasses are immutable values and are
shared between original and clone rather than copied, the same as ints, strings
and anything else that is not a dataclass instance.

Example:
    @dataclass
    class Department:
        name: str = ""
        company: Company | None = relation()
        employees: list[Employee] = relation(inverse="department", default_factory=list)

Cloned instances are created by calling the class with no arguments, so every
field of a cloneable dataclass needs a default.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import MISSING, dataclass, field
from typing import Any

from glom import assign, glom

from graph_cloner.errors import InstantiationError
from graph_cloner.introspect.Introspector import ClassInfo

RELATION = "graph_cloner.relation"
INVERSE = "graph_cloner.inverse"


def relation(
    *,
    inverse: str | None = None,
    default: Any = None,
    default_factory: Callable[[], Any] | Any = MISSING,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field as a relation to other cloneable objects.

    Args:
        inverse: Field on each target that points back at the owner. When set,
            cloned targets have it rewired to the cloned owner.
        default: Default for singular relations (None unless given).
        default_factory: Factory for collection relations, e.g. `list` or `dict`.
        **kwargs: Passed through to `dataclasses.field()`.
    """
    metadata = {**kwargs.pop("metadata", {}), RELATION: True, INVERSE: inverse}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata, **kwargs)
    return field(default=default, metadata=metadata, **kwargs)


@dataclass(frozen=True)
class DataclassInfo:
    cls: type
    scalars: tuple[str, ...]
    relations: tuple[str, ...]
    inverses: Mapping[str, str]

    def inverse_of(self, relation: str) -> str | None:
        return self.inverses.get(relation)


def describe(cls: type) -> DataclassInfo | None:
    """Build the ClassInfo for a dataclass type, or None if it is not cloneable."""
    if not dataclasses.is_dataclass(cls) or cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        return None
    scalars: list[str] = []
    relations: list[str] = []
    inverses: dict[str, str] = {}
    for f in dataclasses.fields(cls):
        if not f.metadata.get(RELATION):
            scalars.append(f.name)
            continue
        relations.append(f.name)
        if f.metadata.get(INVERSE):
            inverses[f.name] = f.metadata[INVERSE]
    return DataclassInfo(cls, tuple(scalars), tuple(relations), inverses)


class DataclassIntrospector:
    """Introspector over mutable dataclass instances.

    Class info is computed once per type. The cache is a plain dict: two threads
    describing the same type at once compute the same value, so the race is benign.
    """

    _infos: dict[type, DataclassInfo | None]

    def __init__(self) -> None:
        self._infos = {}

    def get_class_info(self, obj: Any) -> DataclassInfo | None:
        if obj is None or isinstance(obj, type):
            return None
        cls = type(obj)
        try:
            return self._infos[cls]
        except KeyError:
            info = self._infos[cls] = describe(cls)
            return info

    def get(self, obj: Any, name: str) -> Any:
        return glom(obj, name)

    def set(self, obj: Any, name: str, value: Any) -> None:
        assign(obj, name, value)

    def construct(self, info: ClassInfo, original: Any) -> Any:
        cls = type(original)
        try:
            return cls()
        except Exception as e:
            raise InstantiationError(cls, original) from e


default_introspector = DataclassIntrospector()
"""Shared instance used when a call does not pass its own introspector."""
