"""Pick the request body, call the transport once and screen anomalous statuses."""

from __future__ import annotations

import logging
from typing import Dict

from ..errors import UnexpectedResponseError
from ..response.envelope import ResponseEnvelope
from ..transport.base import Transport, TransportResponse
from .bulk import dumps_compact
from .operation import Operation
from .paths import build_url

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def select_body(operation: Operation) -> bytes:
    """Raw body first, then bulk data for ``_bulk``, else the JSON-encoded query."""

    if operation.body:
        return operation.body
    if operation.is_bulk:
        return operation.bulk_data or b""
    return dumps_compact(operation.query).encode("utf-8")


def request_headers(operation: Operation) -> Dict[str, str]:
    if operation.method.carries_body:
        return {"Content-Type": JSON_CONTENT_TYPE}
    return {}


def is_anomalous_status(status: int) -> bool:
    """Statuses after 201 and below 400 are never produced by a healthy exchange."""

    return 201 < status < 400


def send(transport: Transport, operation: Operation) -> TransportResponse:
    """Send ``operation`` through ``transport`` exactly once.

    Encoding errors surface before the transport is touched and
    ConnectivityError from the transport propagates as is.
    """

    body = select_body(operation)
    url = build_url(operation)
    method = operation.method.value
    logger.debug("[request] %s %s (%d bytes)", method, url, len(body))

    resp = transport.send(method, url, body, request_headers(operation))
    logger.debug("[response] %s %s -> %d (%d bytes)", method, url, resp.status, len(resp.body))

    if is_anomalous_status(resp.status):
        logger.warning("[error] %s %s -> unexpected HTTP %d", method, url, resp.status)
        raise UnexpectedResponseError(
            resp.text,
            status=resp.status,
            response=ResponseEnvelope(status=resp.status),
        )
    return resp


__all__ = [
    "JSON_CONTENT_TYPE",
    "select_body",
    "request_headers",
    "is_anomalous_status",
    "send",
]
