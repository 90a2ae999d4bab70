"""Pseudo-object standing for one key/value pair of a map relation.

Exploring a map relation yields its entries, and a pattern continues into them
with the reserved names "key" and "value", e.g. "prices.(key|value.currency)".
"""

from __future__ import annotations

from typing import Any, NamedTuple

from graph_cloner.errors import UnsupportedPropertyError

KEY = "key"
VALUE = "value"


class MapEntry(NamedTuple):
    key: Any
    value: Any

    def component(self, property_name: str) -> Any:
        """Return the key or the value by its reserved name."""
        if property_name == KEY:
            return self.key
        if property_name == VALUE:
            return self.value
        raise UnsupportedPropertyError(property_name)
