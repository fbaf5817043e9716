"""Transport boundary and the default requests-based implementation."""

from .base import Transport, TransportResponse
from .http_client import HTTPTransport, build_transport

__all__ = ["Transport", "TransportResponse", "HTTPTransport", "build_transport"]
