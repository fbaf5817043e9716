"""Newline-delimited JSON encoding for the ``_bulk`` endpoint."""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..errors import EncodingError
from .operation import BulkCommand, DocumentOperation, ExplicitId

logger = logging.getLogger(__name__)


def dumps_compact(value: Any) -> str:
    """Serialize ``value`` the way every request body is written on the wire."""

    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"value is not JSON serializable: {exc}") from exc


def field_payload(fields: Any) -> Optional[Dict[str, Any]]:
    """Return ``fields`` as a plain dict, or None when there is nothing to send.

    Accepts a string-keyed mapping or a dataclass instance. Anything else
    (scalars, lists, dataclass classes) raises EncodingError.
    """

    if fields is None:
        return None
    if isinstance(fields, Mapping):
        payload = dict(fields)
    elif dataclasses.is_dataclass(fields) and not isinstance(fields, type):
        payload = dataclasses.asdict(fields)
    else:
        raise EncodingError(
            f"document fields must be a mapping or a dataclass instance, got {type(fields).__name__}"
        )
    bad_keys = [key for key in payload if not isinstance(key, str)]
    if bad_keys:
        raise EncodingError(f"document field names must be strings, got {bad_keys[0]!r}")
    return payload or None


def _command(doc: DocumentOperation) -> BulkCommand:
    try:
        return BulkCommand(doc.command)
    except ValueError as exc:
        raise EncodingError(f"unsupported bulk command: {doc.command!r}") from exc


def action_line(doc: DocumentOperation) -> str:
    """Return the ``{command: {_index, _type, _id}}`` metadata line."""

    command = _command(doc)
    meta: Dict[str, Any] = {}
    if doc.index is not None:
        meta["_index"] = doc.index
    if doc.type:
        meta["_type"] = doc.type
    if isinstance(doc.id, ExplicitId):
        meta["_id"] = doc.id.value
    return dumps_compact({command.value: meta})


def encode_bulk(documents: Iterable[DocumentOperation]) -> bytes:
    """Encode documents into the bulk body, one ``\\n``-terminated line per entry.

    Deletes and documents without fields contribute only their action line.
    The engine answers with one result per action line, in this order.
    """

    lines: List[str] = []
    actions = 0
    for doc in documents:
        lines.append(action_line(doc))
        actions += 1
        if _command(doc) is BulkCommand.DELETE:
            continue
        payload = field_payload(doc.fields)
        if payload is None:
            continue
        lines.append(dumps_compact(payload))

    logger.debug("[bulk] encoded %d actions into %d lines", actions, len(lines))
    lines.append("")
    return "\n".join(lines).encode("utf-8")


__all__ = ["dumps_compact", "field_payload", "action_line", "encode_bulk"]
