"""What the cloner needs to know about the objects it copies.

The cloner never inspects objects on its own. It asks an Introspector which
attributes are plain values (scalars) and which point at other cloneable objects
(relations), and goes through it to read, write and construct instances. Any
object model can be cloned by providing an implementation; DataclassIntrospector
is the one used by default.
"""

from __future__ import annotations

from typing import Any, Protocol


class ClassInfo(Protocol):
    """Attribute layout of one cloneable type.

    Attributes:
        scalars: Names copied by value when an instance is cloned.
        relations: Names whose values are other cloneable objects, either directly
            or inside a list, tuple, set, sorted set, dict or sorted dict.
    """

    @property
    def scalars(self) -> tuple[str, ...]: ...

    @property
    def relations(self) -> tuple[str, ...]: ...

    def inverse_of(self, relation: str) -> str | None:
        """Name of the back-reference each target of `relation` holds to its owner, if any."""
        ...


class Introspector(Protocol):
    def get_class_info(self, obj: Any) -> ClassInfo | None:
        """Describe `obj`, or return None if it is not cloneable and should be shared as-is."""
        ...

    def get(self, obj: Any, name: str) -> Any: ...

    def set(self, obj: Any, name: str, value: Any) -> None: ...

    def construct(self, info: ClassInfo, original: Any) -> Any:
        """Create a blank instance of the same kind as `original`.

        Raises:
            InstantiationError: If no instance can be created.
        """
        ...
