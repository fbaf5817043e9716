"""Turn a decoded envelope into success, a ServerError or a BulkItemError."""

from __future__ import annotations

import logging
from typing import List, Tuple

from ..errors import BulkItemError, ServerError
from .envelope import BulkItem, ResponseEnvelope

logger = logging.getLogger(__name__)

UNKNOWN_BULK_ERROR = "Unknown error while bulk indexing"


def failed_bulk_items(envelope: ResponseEnvelope) -> List[Tuple[int, str, BulkItem]]:
    """Return ``(position, command, item)`` for every bulk item carrying an error."""

    failures: List[Tuple[int, str, BulkItem]] = []
    for position, entry in enumerate(envelope.items):
        for command, item in entry.items():
            if item.error:
                failures.append((position, command, item))
    return failures


def classify(envelope: ResponseEnvelope, is_bulk: bool = False) -> ResponseEnvelope:
    """Return ``envelope`` on success, raise the matching error otherwise.

    Bulk responses come back with HTTP 200 even when actions fail, so for
    ``_bulk`` calls the per-item results are inspected before the top-level
    ``error`` field.
    """

    if is_bulk and envelope.errors:
        failures = failed_bulk_items(envelope)
        logger.warning(
            "[error] bulk: %d of %d items failed", len(failures), len(envelope.items)
        )
        if failures:
            _, _, first = failures[0]
            raise BulkItemError(
                first.error,
                status=first.status,
                response=envelope,
                failed_items=failures,
            )
        raise BulkItemError(UNKNOWN_BULK_ERROR, status=None, response=envelope)

    if envelope.error:
        logger.warning("[error] HTTP %d -> %s", envelope.status, envelope.error)
        raise ServerError(envelope.error, status=envelope.status, response=envelope)

    return envelope


__all__ = ["UNKNOWN_BULK_ERROR", "failed_bulk_items", "classify"]
