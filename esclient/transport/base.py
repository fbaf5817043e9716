"""The transport boundary: send one HTTP request, get status, headers and body."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol


@dataclass(frozen=True)
class TransportResponse:
    """Status code, headers and undecoded body of one HTTP exchange."""

    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Anything able to perform a single HTTP request.

    Implementations raise :class:`esclient.errors.ConnectivityError` when the
    exchange cannot complete. Timeouts, retries, pooling, TLS and
    authentication are theirs to manage.
    """

    def send(
        self,
        method: str,
        path: str,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse: ...


__all__ = ["TransportResponse", "Transport"]
