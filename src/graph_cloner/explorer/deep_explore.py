"""Filter-driven traversal: follow every relation the filter approves, to any depth.

Unlike GraphExplorer there is no pattern. Reachability is decided per object and
per relation by the PropertyFilter. Traversal uses an explicit stack, so deep
chains do not exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import MutableSet
from typing import TYPE_CHECKING, Any

from graph_cloner.explorer.EntityExplorer import EntityExplorer
from graph_cloner.explorer.MapEntry import MapEntry

if TYPE_CHECKING:
    from graph_cloner.cloner.PropertyFilter import PropertyFilter
    from graph_cloner.introspect.Introspector import Introspector


def deep_explore(
    root: Any,
    visited: MutableSet[Any],
    explorer: EntityExplorer,
    introspector: Introspector,
    property_filter: PropertyFilter,
) -> None:
    """Explore everything reachable from `root` through approved relations.

    Args:
        root: Where to start.
        visited: Objects already explored. Updated in place, so a batch of roots
            can share it. Should compare by identity (see IdentitySet).
        explorer: Called once for every approved (object, relation) pair.
        introspector: Supplies the relation names of each object.
        property_filter: Decides which relations to follow.
    """
    stack = [root]
    while stack:
        entity = stack.pop()
        if entity is None or entity in visited:
            continue
        visited.add(entity)

        if isinstance(entity, MapEntry):
            stack.extend((entity.value, entity.key))
            continue

        info = introspector.get_class_info(entity)
        if info is None:
            continue
        found: list[Any] = []
        for relation in info.relations:
            if not property_filter(entity, relation):
                continue
            explored = explorer.explore(entity, relation)
            if explored:
                found.extend(explored)
        # Reversed so objects are popped in the order they were found.
        stack.extend(reversed(found))
