"""Decode response bodies into a ResponseEnvelope plus the raw JSON tree."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple

from ..errors import ResponseDecodeError
from .aggregations import aggregations_from
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
from .json_value import JsonValue

logger = logging.getLogger(__name__)


class _Mismatch(ValueError):
    """A response field does not have the shape the envelope expects."""


Coercer = Callable[[Any], Any]
FieldTable = Sequence[Tuple[str, str, Coercer]]


def _fill(target: Any, data: Any, fields: FieldTable, where: str) -> Any:
    """Copy every field of ``data`` that fits ``fields`` onto ``target``.

    A field with the wrong shape keeps the target's default; the rest of the
    object is still decoded.
    """

    if not isinstance(data, dict):
        raise _Mismatch(f"{where}: expected object, got {type(data).__name__}")
    for attr, key, coerce in fields:
        if key not in data:
            continue
        try:
            setattr(target, attr, coerce(data[key]))
        except _Mismatch as exc:
            logger.debug("[decode] %s.%s skipped: %s", where, key, exc)
    return target


def _int(value: Any) -> int:
    if isinstance(value, bool):
        raise _Mismatch(f"expected integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise _Mismatch(f"expected integer, got {value!r}")


def _bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise _Mismatch(f"expected boolean, got {value!r}")
    return value


def _str(value: Any) -> str:
    if not isinstance(value, str):
        raise _Mismatch(f"expected string, got {value!r}")
    return value


def _optional_float(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _Mismatch(f"expected number or null, got {value!r}")
    return float(value)


def _object(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise _Mismatch(f"expected object, got {type(value).__name__}")
    return value


def _map_of(coerce: Coercer, where: str) -> Coercer:
    def convert(value: Any) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, item in _object(value).items():
            try:
                result[key] = coerce(item)
            except _Mismatch as exc:
                logger.debug("[decode] %s[%s] skipped: %s", where, key, exc)
        return result

    return convert


def error_message(value: Any) -> str:
    """Flatten a string or ``{"type": ..., "reason": ...}`` error into text."""

    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        kind = value.get("type")
        reason = value.get("reason")
        if kind and reason:
            return f"{kind}: {reason}"
        if reason or kind:
            return str(reason or kind)
        return json.dumps(value, sort_keys=True)
    if value is None:
        return ""
    raise _Mismatch(f"expected error string or object, got {value!r}")


def _hits_total(value: Any) -> int:
    if isinstance(value, dict):
        return _int(value.get("value"))
    return _int(value)


_SHARDS_FIELDS: FieldTable = (
    ("total", "total", _int),
    ("successful", "successful", _int),
    ("failed", "failed", _int),
)

_HIT_FIELDS: FieldTable = (
    ("index", "_index", _str),
    ("type", "_type", _str),
    ("id", "_id", _str),
    ("score", "_score", _optional_float),
    ("source", "_source", _object),
    ("fields", "fields", _object),
)

_BULK_ITEM_FIELDS: FieldTable = (
    ("ok", "ok", _bool),
    ("index", "_index", _str),
    ("type", "_type", _str),
    ("id", "_id", _str),
    ("version", "_version", _int),
    ("status", "status", _int),
    ("error", "error", error_message),
)

_STAT_PRIMARY_FIELDS: FieldTable = (
    ("count", "count", _int),
    ("deleted", "deleted", _int),
)


def _shards(value: Any) -> Shards:
    return _fill(Shards(), value, _SHARDS_FIELDS, "_shards")


def _hit(value: Any) -> Hit:
    return _fill(Hit(), value, _HIT_FIELDS, "hit")


def _hit_list(value: Any) -> List[Hit]:
    if not isinstance(value, list):
        raise _Mismatch(f"expected array, got {type(value).__name__}")
    hits: List[Hit] = []
    for position, item in enumerate(value):
        try:
            hits.append(_hit(item))
        except _Mismatch as exc:
            logger.debug("[decode] hits[%d] skipped: %s", position, exc)
    return hits


_HITS_FIELDS: FieldTable = (
    ("total", "total", _hits_total),
    ("max_score", "max_score", _optional_float),
    ("hits", "hits", _hit_list),
)


def _hits(value: Any) -> Hits:
    return _fill(Hits(), value, _HITS_FIELDS, "hits")


def _bulk_item(value: Any) -> BulkItem:
    return _fill(BulkItem(), value, _BULK_ITEM_FIELDS, "items")


def _bulk_items(value: Any) -> List[Dict[str, BulkItem]]:
    """Keep one entry per action so positions line up with the request."""

    if not isinstance(value, list):
        raise _Mismatch(f"expected array, got {type(value).__name__}")
    items: List[Dict[str, BulkItem]] = []
    for position, entry in enumerate(value):
        try:
            items.append(_map_of(_bulk_item, f"items[{position}]")(entry))
        except _Mismatch as exc:
            logger.debug("[decode] items[%d] kept empty: %s", position, exc)
            items.append({})
    return items


def _stat_primary(value: Any) -> StatPrimary:
    return _fill(StatPrimary(), value, _STAT_PRIMARY_FIELDS, "primaries")


_STAT_INDEX_FIELDS: FieldTable = (
    ("primaries", "primaries", _map_of(_stat_primary, "primaries")),
)


def _stat_index(value: Any) -> StatIndex:
    return _fill(StatIndex(), value, _STAT_INDEX_FIELDS, "_all.indices")


_ALL_FIELDS: FieldTable = (
    ("indices", "indices", _map_of(_stat_index, "_all.indices")),
    ("primaries", "primaries", _map_of(_stat_primary, "_all.primaries")),
)


def _all_stats(value: Any) -> AllStats:
    return _fill(AllStats(), value, _ALL_FIELDS, "_all")


_INDEX_STATUS_FIELDS: FieldTable = (
    ("index", "index", _object),
    ("translog", "translog", _map_of(_int, "translog")),
    ("docs", "docs", _map_of(_int, "docs")),
    ("merges", "merges", _object),
    ("refresh", "refresh", _object),
    ("flush", "flush", _object),
)


def _index_status(value: Any) -> IndexStatus:
    return _fill(IndexStatus(), value, _INDEX_STATUS_FIELDS, "indices")


_ENVELOPE_FIELDS: FieldTable = (
    ("ok", "ok", _bool),
    ("acknowledged", "acknowledged", _bool),
    ("error", "error", error_message),
    ("status", "status", _int),
    ("took", "took", _int),
    ("timed_out", "timed_out", _bool),
    ("shards", "_shards", _shards),
    ("hits", "hits", _hits),
    ("index", "_index", _str),
    ("id", "_id", _str),
    ("type", "_type", _str),
    ("version", "_version", _int),
    ("found", "found", _bool),
    ("count", "count", _int),
    ("all", "_all", _all_stats),
    ("errors", "errors", _bool),
    ("items", "items", _bulk_items),
    ("exists", "exists", _bool),
    ("source", "_source", _object),
    ("fields", "fields", _object),
    ("indices", "indices", _map_of(_index_status, "indices")),
    ("scroll_id", "_scroll_id", _str),
)


def decode_response(method: str, status: int, body: bytes) -> ResponseEnvelope:
    """Build the envelope for one response.

    HEAD responses and empty bodies only carry ``status``. Otherwise the body
    is decoded twice: a typed pass projected onto the envelope field by field,
    and a raw pass (numbers as float) stored in ``raw`` and used for
    ``aggregations``. A numeric ``status`` in the body replaces the HTTP one.
    """

    envelope = ResponseEnvelope(status=status)
    if method == "HEAD" or not body.strip():
        return envelope

    try:
        text = body.decode("utf-8")
        typed = json.loads(text)
        raw = json.loads(text, parse_int=float)
    except ValueError as exc:
        raise ResponseDecodeError(
            f"response body is not JSON: {exc}", status=status, response=envelope
        ) from exc

    envelope.raw = JsonValue(raw)
    if isinstance(typed, dict):
        _fill(envelope, typed, _ENVELOPE_FIELDS, "response")
        envelope.aggregations = aggregations_from(raw.get("aggregations"))
    return envelope


__all__ = ["decode_response", "error_message"]
