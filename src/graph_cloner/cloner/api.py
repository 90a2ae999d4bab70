"""Thread-safe entry points for cloning object graphs.

Each call runs in its own Cloner session, so concurrent calls never share state.
Passing a list, set or frozenset clones every element in one session (objects
shared between roots are cloned once) and returns a container of the same kind.

Usage:
    from graph_cloner.cloner.api import clone, deep_clone

    # relations named by patterns, all scalars
    company2 = clone(company, "departments+.(boss|employees).address")

    # relations and scalars chosen by a filter
    company3 = deep_clone(company, exclude("id"))
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from graph_cloner.cloner.Cloner import Cloner
from graph_cloner.cloner.PropertyFilter import PropertyFilter, allow_all
from graph_cloner.introspect.Introspector import Introspector
from graph_cloner.pattern.Pattern import Pattern
from graph_cloner.util.logging_config import get_logger

logger = get_logger("cloner")


def _each_root(root: Any, clone_one: Callable[[Any], Any]) -> Any:
    match root:
        case list():
            return [clone_one(r) for r in root]
        case frozenset():
            return frozenset(clone_one(r) for r in root)
        case set():
            return {clone_one(r) for r in root}
        case _:
            return clone_one(root)


def clone_with_map[T](
    root: T,
    *patterns: str | Pattern,
    property_filter: PropertyFilter = allow_all,
    introspector: Introspector | None = None,
) -> tuple[T, Mapping[Any, Any]]:
    """Like `clone`, but also returns the original -> clone identity map."""
    cloner = Cloner(property_filter, introspector)
    result = _each_root(root, lambda r: cloner.clone(r, *patterns))
    logger.debug("cloned %d objects using patterns %r", len(cloner.identity_map), patterns)
    return result, cloner.identity_map


def clone[T](
    root: T,
    *patterns: str | Pattern,
    property_filter: PropertyFilter = allow_all,
    introspector: Introspector | None = None,
) -> T:
    """Clone `root` and the relations matched by `patterns`.

    Args:
        root: An object, or a list/set/frozenset of objects.
        *patterns: Relations to follow, e.g. "orders.lines.product". Without
            patterns only the root itself is cloned.
        property_filter: Decides which scalars are copied. Copies all by default.
        introspector: Object model description. Defaults to dataclasses.

    Raises:
        PatternSyntaxError: If a pattern cannot be parsed.
        InstantiationError: If an object cannot be constructed.
        UnsupportedContainerKindError: If a relation holds an unknown container.
    """
    return clone_with_map(
        root, *patterns, property_filter=property_filter, introspector=introspector
    )[0]


def deep_clone_with_map[T](
    root: T,
    property_filter: PropertyFilter = allow_all,
    introspector: Introspector | None = None,
) -> tuple[T, Mapping[Any, Any]]:
    """Like `deep_clone`, but also returns the original -> clone identity map."""
    cloner = Cloner(property_filter, introspector)
    result = _each_root(root, cloner.deep_clone)
    logger.debug("deep cloned %d objects", len(cloner.identity_map))
    return result, cloner.identity_map


def deep_clone[T](
    root: T,
    property_filter: PropertyFilter = allow_all,
    introspector: Introspector | None = None,
) -> T:
    """Clone `root` and everything reachable through relations the filter approves.

    The filter is consulted for scalars and relations alike. With the default
    filter the whole reachable graph is cloned.
    """
    return deep_clone_with_map(root, property_filter, introspector)[0]
