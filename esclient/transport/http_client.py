"""requests-based transport used when the caller does not bring its own."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from ..config import ClientSettings
from ..errors import ConnectivityError
from .base import TransportResponse

logger = logging.getLogger(__name__)

USER_AGENT = "esclient/1.0"


class HTTPTransport:
    """Send requests to one Elasticsearch node through a ``requests.Session``.

    When no ``session`` is given one is created and configured with the
    user agent, compression and credentials. A caller-supplied session is used
    as-is: its headers and auth are left untouched, and :meth:`close` does not
    close it.
    """

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_key: Optional[str] = None,
        verify_tls: bool = True,
        timeout: Optional[float] = 30.0,
        compress: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.verify = bool(verify_tls)
        self.timeout = timeout
        self.compress = compress
        self._owns_session = session is None
        if session is not None:
            self.session = session
            return

        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        if not compress:
            self.session.headers["Accept-Encoding"] = "identity"
        if api_key:
            self.session.headers["Authorization"] = f"ApiKey {api_key}"
        elif username and password:
            self.session.auth = (username, password)

    def _url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    def send(
        self,
        method: str,
        path: str,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse:
        """Perform one request; network failures become ConnectivityError."""

        url = self._url(path)
        try:
            resp = self.session.request(
                method,
                url,
                data=body or None,
                headers=dict(headers or {}),
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as exc:
            logger.warning("[error] %s %s -> %s", method, url, exc)
            raise ConnectivityError(str(exc)) from exc

        return TransportResponse(
            status=resp.status_code,
            body=resp.content or b"",
            headers=dict(resp.headers or {}),
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_transport(settings: ClientSettings) -> HTTPTransport:
    """Create an HTTPTransport from resolved settings."""

    return HTTPTransport(
        base_url=settings.es_url,
        username=settings.username,
        password=settings.password,
        api_key=settings.api_key,
        verify_tls=settings.verify_tls,
        timeout=settings.timeout,
        compress=settings.compress,
    )


__all__ = ["USER_AGENT", "HTTPTransport", "build_transport"]
