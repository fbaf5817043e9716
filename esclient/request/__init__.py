"""Request construction: operations, paths, bulk bodies and dispatch."""

from .bulk import encode_bulk, field_payload
from .dispatcher import select_body, send
from .operation import (
    SERVER_ASSIGNED,
    BulkCommand,
    DocumentId,
    DocumentOperation,
    ExplicitId,
    Method,
    Operation,
    ServerAssigned,
    document_id,
)
from .paths import build_path, build_query_string, build_url, normalize_params

__all__ = [
    "SERVER_ASSIGNED",
    "BulkCommand",
    "DocumentId",
    "DocumentOperation",
    "ExplicitId",
    "Method",
    "Operation",
    "ServerAssigned",
    "document_id",
    "encode_bulk",
    "field_payload",
    "select_body",
    "send",
    "build_path",
    "build_query_string",
    "build_url",
    "normalize_params",
]
