"""Typed projection of every response shape the engine returns.

A single :class:`ResponseEnvelope` covers all endpoints; each call fills the
fields its endpoint produces and leaves the others at their zero values.
Anything the fixed shape cannot express is reachable through ``raw``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .aggregations import Aggregation
from .json_value import JsonValue


@dataclass
class Shards:
    total: int = 0
    successful: int = 0
    failed: int = 0


@dataclass
class Hit:
    index: str = ""
    type: str = ""
    id: str = ""
    score: Optional[float] = None
    source: Dict[str, Any] = field(default_factory=dict)
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Hits:
    total: int = 0
    # max_score is null when sorting on something other than relevance
    max_score: Optional[float] = None
    hits: List[Hit] = field(default_factory=list)


@dataclass
class BulkItem:
    """Result of one bulk action line."""

    ok: bool = False
    index: str = ""
    type: str = ""
    id: str = ""
    version: int = 0
    status: int = 0
    error: str = ""


@dataclass
class StatPrimary:
    count: int = 0
    deleted: int = 0


@dataclass
class StatIndex:
    primaries: Dict[str, StatPrimary] = field(default_factory=dict)


@dataclass
class AllStats:
    """The ``_all`` section of a ``_stats`` response."""

    indices: Dict[str, StatIndex] = field(default_factory=dict)
    primaries: Dict[str, StatPrimary] = field(default_factory=dict)


@dataclass
class IndexStatus:
    """Per-index entry of a ``_status`` response."""

    index: Dict[str, Any] = field(default_factory=dict)
    translog: Dict[str, int] = field(default_factory=dict)
    docs: Dict[str, int] = field(default_factory=dict)
    merges: Dict[str, Any] = field(default_factory=dict)
    refresh: Dict[str, Any] = field(default_factory=dict)
    flush: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResponseEnvelope:
    ok: bool = False
    acknowledged: bool = False
    error: str = ""
    status: int = 0
    took: int = 0
    timed_out: bool = False
    shards: Shards = field(default_factory=Shards)
    hits: Hits = field(default_factory=Hits)
    index: str = ""
    id: str = ""
    type: str = ""
    version: int = 0
    found: bool = False
    count: int = 0

    # _stats
    all: AllStats = field(default_factory=AllStats)

    # _bulk
    errors: bool = False
    items: List[Dict[str, BulkItem]] = field(default_factory=list)

    # GET
    exists: bool = False
    source: Dict[str, Any] = field(default_factory=dict)
    fields: Dict[str, Any] = field(default_factory=dict)

    # _status
    indices: Dict[str, IndexStatus] = field(default_factory=dict)

    scroll_id: str = ""
    aggregations: Dict[str, Aggregation] = field(default_factory=dict)

    raw: Optional[JsonValue] = None

    def aggregation(self, name: str) -> Aggregation:
        """Return the top-level aggregation ``name``, or an empty one."""

        return self.aggregations.get(name) or Aggregation()


__all__ = [
    "Shards",
    "Hit",
    "Hits",
    "BulkItem",
    "StatPrimary",
    "StatIndex",
    "AllStats",
    "IndexStatus",
    "ResponseEnvelope",
]
