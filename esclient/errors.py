"""Exception taxonomy shared by the request, transport and response layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .response.envelope import BulkItem, ResponseEnvelope


class EsClientError(Exception):
    """Base class for every error raised by esclient."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Optional["ResponseEnvelope"] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"[{self.status}] {self.message}"


class ConnectivityError(EsClientError):
    """The transport could not complete the HTTP exchange."""


class EncodingError(EsClientError, ValueError):
    """Caller-supplied data could not be serialized into a request body."""


class ResponseDecodeError(EsClientError):
    """The engine answered with a body that is not JSON."""


class ServerError(EsClientError):
    """The engine reported a top-level error for the request."""


class UnexpectedResponseError(ServerError):
    """A status in the (201, 400) range, which the protocol never expects."""


class BulkItemError(ServerError):
    """One or more actions of a bulk request failed.

    ``message`` and ``status`` describe the first failing item.
    ``failed_items`` lists every failure as ``(position, command, item)``
    tuples in request order. Items that succeeded in the same batch stay
    applied on the server.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Optional["ResponseEnvelope"] = None,
        failed_items: Optional[List[Tuple[int, str, "BulkItem"]]] = None,
    ) -> None:
        super().__init__(message, status, response)
        self.failed_items = list(failed_items or [])


class JsonTypeError(TypeError):
    """A JsonValue accessor was used against a value of another kind."""

    def __init__(self, expected: str, actual: Any) -> None:
        super().__init__(f"expected JSON {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


__all__ = [
    "EsClientError",
    "ConnectivityError",
    "EncodingError",
    "ResponseDecodeError",
    "ServerError",
    "UnexpectedResponseError",
    "BulkItemError",
    "JsonTypeError",
]
