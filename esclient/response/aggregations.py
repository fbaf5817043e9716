"""Schema-free traversal of aggregation results.

Values come from the raw response tree, so counts and metrics are floats.
Nothing is validated up front: a missing ``doc_count`` or a ``buckets`` entry
of the wrong shape only fails when it is used.
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..errors import JsonTypeError
from .json_value import JsonValue


class Aggregation(dict):
    """One named aggregation result."""

    def buckets(self) -> List["Bucket"]:
        """Return the buckets in server order; ``[]`` when there are none."""

        raw = self.get("buckets")
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise JsonTypeError("array", type(raw).__name__)
        return [Bucket(bucket) for bucket in raw]

    def value(self, name: str) -> JsonValue:
        """Return member ``name`` as a JsonValue; raises KeyError when absent."""

        return JsonValue(self[name])

    def aggregation(self, name: str) -> "Aggregation":
        """Return the nested aggregation ``name``, or an empty one.

        Works for buckets and for single-bucket aggregations such as
        ``filter`` or ``nested``, whose sub-aggregations sit on the node itself.
        """

        nested = self.get(name)
        if nested is None:
            return Aggregation()
        return Aggregation(nested)


class Bucket(Aggregation):
    """A grouped result carrying ``key``, ``doc_count`` and nested aggregations."""

    def key(self) -> Any:
        return self.get("key")

    def key_as_string(self) -> Optional[str]:
        return self.get("key_as_string")

    def doc_count(self) -> int:
        return int(self["doc_count"])


def aggregations_from(raw: Any) -> dict:
    """Wrap every entry of a raw ``aggregations`` object as an Aggregation."""

    if not isinstance(raw, dict):
        return {}
    return {name: Aggregation(node) for name, node in raw.items() if isinstance(node, dict)}


__all__ = ["Aggregation", "Bucket", "aggregations_from"]
