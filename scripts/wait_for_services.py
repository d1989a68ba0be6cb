"""Readiness probe for the S3 emulator (LocalStack or MinIO)."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

import requests
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_delay,
    wait_fixed,
)

from bucketprobe.config import Settings, get_settings

LOGGER = logging.getLogger(__name__)

LOCALSTACK_HEALTH_PATH = "/_localstack/health"
MINIO_HEALTH_PATH = "/minio/health/live"
READY_S3_STATES = {"available", "running"}
REQUEST_TIMEOUT = 5


class ServiceNotReady(Exception):
    """The service answered but is not serving S3 yet."""


def check_localstack(url: str) -> None:
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    try:
        payload = response.json()
    except ValueError as exc:
        raise ServiceNotReady(f"Malformed health response from {url}") from exc
    services = payload.get("services") if isinstance(payload, dict) else None
    if not isinstance(services, dict):
        raise ServiceNotReady(f"Malformed health response from {url}: {payload!r}")
    state = services.get("s3")
    if state not in READY_S3_STATES:
        raise ServiceNotReady(f"S3 not available (state={state})")


def check_minio(url: str) -> None:
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    if response.status_code != 200:
        raise ServiceNotReady(f"MinIO not live (status={response.status_code})")


def health_check_for(settings: Settings) -> tuple[str, Callable[[str], None]]:
    """Pick the health endpoint and the matching readiness check."""
    url = settings.health_url or f"{settings.base_url}{LOCALSTACK_HEALTH_PATH}"
    if MINIO_HEALTH_PATH in url:
        return url, check_minio
    return url, check_localstack


def wait_for_object_store(
    settings: Optional[Settings] = None,
    timeout: Optional[float] = None,
    interval: float = 2.0,
) -> None:
    settings = settings or get_settings()
    timeout = settings.ready_timeout if timeout is None else timeout
    url, check = health_check_for(settings)
    retrying = Retrying(
        retry=retry_if_exception_type((requests.RequestException, ServiceNotReady)),
        stop=stop_after_delay(timeout),
        wait=wait_fixed(interval),
        before_sleep=before_sleep_log(LOGGER, logging.INFO),
    )
    try:
        retrying(check, url)
    except RetryError as exc:
        last = exc.last_attempt.exception()
        raise TimeoutError(f"Object store not ready within {timeout}s: {last}") from exc
    LOGGER.info("Object store is ready (%s)", url)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    wait_for_object_store()


if __name__ == "__main__":
    try:
        main()
    except TimeoutError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
