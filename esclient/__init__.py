"""Client library for the Elasticsearch REST API."""

import logging

from .client import Client
from .config import ClientSettings, resolve_settings
from .errors import (
    BulkItemError,
    ConnectivityError,
    EncodingError,
    EsClientError,
    JsonTypeError,
    ResponseDecodeError,
    ServerError,
    UnexpectedResponseError,
)
from .request.operation import (
    SERVER_ASSIGNED,
    BulkCommand,
    DocumentOperation,
    ExplicitId,
    Method,
    Operation,
    document_id,
)
from .response.aggregations import Aggregation, Bucket
from .response.envelope import ResponseEnvelope
from .response.json_value import JsonKind, JsonValue
from .transport import HTTPTransport, Transport, TransportResponse, build_transport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "ClientSettings",
    "resolve_settings",
    "BulkItemError",
    "ConnectivityError",
    "EncodingError",
    "EsClientError",
    "JsonTypeError",
    "ResponseDecodeError",
    "ServerError",
    "UnexpectedResponseError",
    "SERVER_ASSIGNED",
    "BulkCommand",
    "DocumentOperation",
    "ExplicitId",
    "Method",
    "Operation",
    "document_id",
    "Aggregation",
    "Bucket",
    "ResponseEnvelope",
    "JsonKind",
    "JsonValue",
    "HTTPTransport",
    "Transport",
    "TransportResponse",
    "build_transport",
]
