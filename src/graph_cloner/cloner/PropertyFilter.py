"""Per-object, per-attribute veto over what gets cloned.

A filter is any callable `(entity, name) -> bool`. The cloner asks it before
copying each scalar of a newly cloned object, and deep cloning also asks it
before following each relation.

Example:
    no_ids = exclude("id")
    clone(company, "departments", property_filter=no_ids)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

type PropertyFilter = Callable[[Any, str], bool]


def allow_all(entity: Any, name: str) -> bool:
    """Default filter: clone everything."""
    return True


def exclude(*names: str) -> PropertyFilter:
    """Reject the given attribute names on every object."""
    rejected = frozenset(names)

    def property_filter(entity: Any, name: str) -> bool:
        return name not in rejected

    return property_filter


def only(*names: str) -> PropertyFilter:
    """Approve only the given attribute names on every object."""
    approved = frozenset(names)

    def property_filter(entity: Any, name: str) -> bool:
        return name in approved

    return property_filter


def all_of(*filters: PropertyFilter) -> PropertyFilter:
    """Approve an attribute only if every filter approves it."""

    def property_filter(entity: Any, name: str) -> bool:
        return all(f(entity, name) for f in filters)

    return property_filter
