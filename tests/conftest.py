"""Shared fakes and fixtures for the storage tests."""

from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Dict, List, Optional, Set, Tuple

import pytest

from bucketprobe.storage import ObjectStore


class FakeS3Error(Exception):
    """Stand-in for an SDK error that carries an HTTP response."""

    def __init__(self, status: Optional[int], code: str = "", message: str = "") -> None:
        super().__init__(message or code or f"status {status}")
        self.code = code
        self.response = SimpleNamespace(status=status) if status is not None else None


class MemoryBackend:
    """In-memory S3 double exposing the MinIO method surface."""

    def __init__(self) -> None:
        self.buckets: Set[str] = set()
        self.objects: Dict[Tuple[str, str], bytes] = {}
        self.forbidden: Set[Tuple[str, str]] = set()
        self.calls: List[Tuple[str, tuple]] = []

    def make_bucket(self, bucket_name: str) -> None:
        self.calls.append(("make_bucket", (bucket_name,)))
        if bucket_name in self.buckets:
            raise FakeS3Error(409, "BucketAlreadyOwnedByYou")
        self.buckets.add(bucket_name)

    def put_object(self, bucket_name: str, object_name: str, data, length: int) -> None:
        self.calls.append(("put_object", (bucket_name, object_name, length)))
        if bucket_name not in self.buckets:
            raise FakeS3Error(404, "NoSuchBucket")
        self.objects[(bucket_name, object_name)] = data.read(length)

    def stat_object(self, bucket_name: str, object_name: str) -> SimpleNamespace:
        self.calls.append(("stat_object", (bucket_name, object_name)))
        if (bucket_name, object_name) in self.forbidden:
            raise FakeS3Error(403, "AccessDenied")
        if (bucket_name, object_name) not in self.objects:
            raise FakeS3Error(404, "NoSuchKey")
        body = self.objects[(bucket_name, object_name)]
        return SimpleNamespace(bucket_name=bucket_name, object_name=object_name, size=len(body))


class BlockingBackend:
    """Backend whose calls hang until ``release`` is set."""

    def __init__(self) -> None:
        self.started = threading.Event()
        self.release = threading.Event()

    def _block(self) -> None:
        self.started.set()
        self.release.wait(timeout=5)

    def make_bucket(self, bucket_name: str) -> None:
        self._block()

    def put_object(self, bucket_name: str, object_name: str, data, length: int) -> None:
        self._block()

    def stat_object(self, bucket_name: str, object_name: str) -> None:
        self._block()


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(memory_backend: MemoryBackend) -> ObjectStore:
    return ObjectStore(memory_backend)


@pytest.fixture
def blocking_backend():
    backend = BlockingBackend()
    yield backend
    backend.release.set()


@pytest.fixture
def s3_error():
    return FakeS3Error
