"""Response translation: envelope types, decoding, classification, aggregations."""

from .aggregations import Aggregation, Bucket
from .classifier import classify
from .decoder import decode_response
from .envelope import (
    AllStats,
    BulkItem,
    Hit,
    Hits,
    IndexStatus,
    ResponseEnvelope,
    Shards,
    StatIndex,
    StatPrimary,
)
from .json_value import JsonKind, JsonValue

__all__ = [
    "Aggregation",
    "Bucket",
    "classify",
    "decode_response",
    "AllStats",
    "BulkItem",
    "Hit",
    "Hits",
    "IndexStatus",
    "ResponseEnvelope",
    "Shards",
    "StatIndex",
    "StatPrimary",
    "JsonKind",
    "JsonValue",
]
