"""Connection settings resolved from local secrets and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_FILENAME = "local_secrets.json"
SECRETS_ENV_VAR = "ESCLIENT_SECRETS_FILE"

DEFAULT_ES_URL = "http://localhost:9200"
DEFAULT_TIMEOUT = 30.0
DEFAULT_VERIFY_TLS = True
DEFAULT_COMPRESS = True

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ClientSettings:
    """Resolved settings for building an HTTP transport."""

    es_url: str = DEFAULT_ES_URL
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None
    verify_tls: bool = DEFAULT_VERIFY_TLS
    timeout: float = DEFAULT_TIMEOUT
    compress: bool = DEFAULT_COMPRESS


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load the JSON secrets file; return {} when it is missing or unusable."""

    candidate = path or os.getenv(SECRETS_ENV_VAR) or DEFAULT_SECRETS_FILENAME
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as exc:
        logger.warning("[config] ignoring unreadable secrets file %s: %s", secrets_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


def resolve_settings(
    path: Optional[str | Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ClientSettings:
    """Layer defaults, the secrets file's ``elasticsearch`` section and ES_* variables."""

    env = os.environ if env is None else env
    section = load_local_secrets(path).get("elasticsearch", {})
    if not isinstance(section, dict):
        section = {}

    def pick(env_key: str, secret_key: str, default: Any) -> Any:
        if env.get(env_key) not in (None, ""):
            return env[env_key]
        if section.get(secret_key) not in (None, ""):
            return section[secret_key]
        return default

    return ClientSettings(
        es_url=str(pick("ES_URL", "url", DEFAULT_ES_URL)),
        username=pick("ES_USERNAME", "username", None),
        password=pick("ES_PASSWORD", "password", None),
        api_key=pick("ES_API_KEY", "api_key", None),
        verify_tls=_as_bool(pick("ES_VERIFY_TLS", "verify_tls", DEFAULT_VERIFY_TLS)),
        timeout=float(pick("ES_REQUEST_TIMEOUT", "timeout", DEFAULT_TIMEOUT)),
        compress=_as_bool(pick("ES_HTTP_COMPRESS", "compress", DEFAULT_COMPRESS)),
    )


__all__ = [
    "DEFAULT_SECRETS_FILENAME",
    "SECRETS_ENV_VAR",
    "DEFAULT_ES_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_VERIFY_TLS",
    "DEFAULT_COMPRESS",
    "ClientSettings",
    "load_local_secrets",
    "resolve_settings",
]
