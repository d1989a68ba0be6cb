"""Centralized configuration loading for the object-store client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

AWS_DEFAULT_ENDPOINT = "s3.amazonaws.com"


@dataclass(frozen=True)
class Settings:
    """Immutable container for environment-driven settings."""

    endpoint: str
    secure: bool
    region: str
    path_style: bool
    bucket: str
    ready_timeout: int
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    session_token: Optional[str] = None
    health_url: Optional[str] = None

    @property
    def static_credentials(self) -> bool:
        """True when credentials come from settings rather than the SDK chain."""
        return self.access_key is not None and self.secret_key is not None

    @property
    def base_url(self) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_positive_int(key: str, value: str, min_value: int = 1) -> int:
    """Parse and validate a positive integer from environment variable.

    Raises:
        ValueError: If value is not a positive integer or below min_value
    """
    try:
        parsed = int(value)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got: {value}") from e

    if parsed < min_value:
        raise ValueError(f"{key} must be >= {min_value}, got: {parsed}")

    return parsed


def _split_endpoint(raw: str) -> Tuple[str, Optional[bool]]:
    """Strip an optional scheme; MinIO wants bare ``host[:port]``."""
    raw = raw.strip().rstrip("/")
    lowered = raw.lower()
    if lowered.startswith("https://"):
        return raw[len("https://") :], True
    if lowered.startswith("http://"):
        return raw[len("http://") :], False
    return raw, None


def _get_optional(key: str) -> Optional[str]:
    value = os.environ.get(key, "").strip()
    return value or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process.

    With ``S3_ENDPOINT`` set the client targets that endpoint (an emulator
    such as LocalStack or MinIO) using path-style addressing. Without it the
    client talks to AWS over TLS. Static credentials are optional; when both
    keys are absent the SDK's own provider chain resolves them.
    """

    access_key = _get_optional("S3_ACCESS_KEY")
    secret_key = _get_optional("S3_SECRET_KEY")
    if (access_key is None) != (secret_key is None):
        missing = "S3_SECRET_KEY" if secret_key is None else "S3_ACCESS_KEY"
        raise RuntimeError(f"Missing required environment variables: {missing}")

    raw_endpoint = _get_optional("S3_ENDPOINT")
    if raw_endpoint is None:
        endpoint, scheme_secure = AWS_DEFAULT_ENDPOINT, True
    else:
        endpoint, scheme_secure = _split_endpoint(raw_endpoint)
        if not endpoint:
            raise RuntimeError(f"S3_ENDPOINT is not a valid endpoint: {raw_endpoint!r}")

    default_secure = scheme_secure if scheme_secure is not None else raw_endpoint is None

    return Settings(
        endpoint=endpoint,
        secure=_get_bool(os.environ.get("S3_SECURE"), default=default_secure),
        region=_get_optional("S3_REGION") or "us-east-1",
        path_style=_get_bool(
            os.environ.get("S3_PATH_STYLE"), default=raw_endpoint is not None
        ),
        bucket=_get_optional("S3_BUCKET") or "test",
        ready_timeout=_get_positive_int(
            "S3_READY_TIMEOUT", os.environ.get("S3_READY_TIMEOUT", "60"), min_value=1
        ),
        access_key=access_key,
        secret_key=secret_key,
        session_token=_get_optional("S3_SESSION_TOKEN"),
        health_url=_get_optional("S3_HEALTH_URL"),
    )
