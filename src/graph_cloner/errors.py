"""Exceptions raised by graph_cloner."""

from __future__ import annotations

from typing import Any


class GraphClonerError(Exception):
    """Base class for every error raised by this package."""


class PatternSyntaxError(GraphClonerError, ValueError):
    """A pattern string could not be parsed.

    Attributes:
        pattern: The offending source string.
        position: Index into `pattern` where parsing failed.
        reason: Short description of what was expected.
    """

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        self.pattern = pattern
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at position {position} in pattern {pattern!r}")


class UnsupportedPropertyError(GraphClonerError):
    """A map entry was asked for something other than "key" or "value"."""

    def __init__(self, property_name: str) -> None:
        self.property_name = property_name
        super().__init__(f"Map entry does not have property: {property_name!r}")


class UnsupportedContainerKindError(GraphClonerError, TypeError):
    """A relation holds a container the cloner does not know how to rebuild."""

    def __init__(self, container: Any, relation: str) -> None:
        self.container_type = type(container)
        self.relation = relation
        super().__init__(
            f"Unsupported container {self.container_type.__qualname__} "
            f"in relation {relation!r}"
        )


class InstantiationError(GraphClonerError):
    """A blank instance of a cloneable class could not be constructed."""

    def __init__(self, cls: type, original: Any) -> None:
        self.cls = cls
        self.original = original
        super().__init__(f"Unable to clone {original!r}: cannot instantiate {cls.__qualname__}")
