"""Immutable request descriptions consumed by the builder, encoder and dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union


class Method(str, Enum):
    """HTTP methods used by the REST protocol."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def carries_body(self) -> bool:
        return self in (Method.POST, Method.PUT)


class BulkCommand(str, Enum):
    """Actions accepted on a bulk action line."""

    INDEX = "index"
    DELETE = "delete"


class ServerAssigned:
    """Marker for documents whose id is chosen by the engine."""

    _instance: Optional["ServerAssigned"] = None

    def __new__(cls) -> "ServerAssigned":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_ASSIGNED"

    def __bool__(self) -> bool:
        return False


SERVER_ASSIGNED = ServerAssigned()


@dataclass(frozen=True)
class ExplicitId:
    """A caller-chosen document id; the empty string is a valid id."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"document id must be a string, got {type(self.value).__name__}")


DocumentId = Union[ServerAssigned, ExplicitId]


def document_id(value: Optional[str]) -> DocumentId:
    """Map ``None`` to SERVER_ASSIGNED and a string to ExplicitId."""

    if value is None:
        return SERVER_ASSIGNED
    return ExplicitId(value)


# Ordered (key, value) pairs; a repeated key is a multi-valued parameter.
Params = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class Operation:
    """One REST call: where it goes, which method, and which body source."""

    method: Method
    indices: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    doc_id: DocumentId = SERVER_ASSIGNED
    api: str = ""
    params: Params = ()
    query: Any = None
    body: Optional[bytes] = None
    bulk_data: Optional[bytes] = None

    @property
    def is_bulk(self) -> bool:
        return self.api == "_bulk"


@dataclass(frozen=True)
class DocumentOperation:
    """A single document as seen by ``index``, ``delete``, ``update`` and bulk.

    ``fields`` is a string-keyed mapping or a dataclass instance. ``None``
    or an empty field set produces a metadata-only bulk action.
    """

    index: Optional[str]
    type: Optional[str] = None
    id: DocumentId = SERVER_ASSIGNED
    command: BulkCommand = BulkCommand.INDEX
    fields: Any = None


__all__ = [
    "Method",
    "BulkCommand",
    "ServerAssigned",
    "SERVER_ASSIGNED",
    "ExplicitId",
    "DocumentId",
    "document_id",
    "Params",
    "Operation",
    "DocumentOperation",
]
