"""Fixture lifecycle for tests that talk to a running S3 emulator.

Start one with ``docker compose -f docker/docker-compose.yml up -d`` and run
``S3_ENDPOINT=http://localhost:4566 S3_ACCESS_KEY=AKID S3_SECRET_KEY=SECRET_KEY
pytest -m integration``.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import List, Optional, Tuple

import pytest

from bucketprobe.config import Settings, get_settings
from bucketprobe.storage import MinioStorage
from scripts.wait_for_services import wait_for_object_store

logger = logging.getLogger(__name__)


class EmulatorFixture:
    """Scoped handle on an emulator: readiness on start, cleanup on stop."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.storage: Optional[MinioStorage] = None
        self._buckets: List[str] = []
        self._objects: List[Tuple[str, str]] = []

    def start(self) -> "EmulatorFixture":
        wait_for_object_store(self.settings)
        self.storage = MinioStorage(self.settings)
        return self

    def new_bucket_name(self) -> str:
        name = f"{self.settings.bucket}-{uuid.uuid4().hex[:12]}"
        self._buckets.append(name)
        return name

    def track_object(self, bucket: str, key: str) -> None:
        self._objects.append((bucket, key))

    def stop(self) -> None:
        if self.storage is None:
            return
        client = self.storage.backend
        for bucket, key in self._objects:
            try:
                client.remove_object(bucket, key)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Could not remove %s/%s: %s", bucket, key, exc)
        for bucket in self._buckets:
            try:
                client.remove_bucket(bucket)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Could not remove bucket %s: %s", bucket, exc)
        self._objects.clear()
        self._buckets.clear()

    def __enter__(self) -> "EmulatorFixture":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        return False


@pytest.fixture(scope="session")
def emulator_settings() -> Settings:
    if not os.environ.get("S3_ENDPOINT"):
        pytest.skip("S3_ENDPOINT not set; no emulator to test against")
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def emulator(emulator_settings):
    with EmulatorFixture(emulator_settings) as fixture:
        yield fixture
