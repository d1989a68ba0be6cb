"""Abstract base classes and helpers for storage adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional, Protocol, Union, runtime_checkable

from bucketprobe.storage.context import CallContext

Content = Union[bytes, bytearray, memoryview]


@runtime_checkable
class StorageBackend(Protocol):
    """Capabilities borrowed from a caller-supplied S3-compatible connection.

    Method names and argument order match ``minio.Minio`` so a MinIO client
    satisfies the protocol as-is.
    """

    def make_bucket(self, bucket_name: str) -> Any: ...

    def put_object(
        self, bucket_name: str, object_name: str, data: BinaryIO, length: int
    ) -> Any: ...

    def stat_object(self, bucket_name: str, object_name: str) -> Any: ...


class StorageAdapter(ABC):
    """Define a minimal interface for MinIO/S3-compatible storage."""

    @abstractmethod
    def ensure_bucket(
        self, bucket: str, *, ctx: Optional[CallContext] = None
    ) -> None:  # pragma: no cover - interface contract
        """Ask the backend to create a bucket."""

    @abstractmethod
    def put_object(
        self, bucket: str, key: str, data: Content, *, ctx: Optional[CallContext] = None
    ) -> None:
        """Upload ``data`` under ``key``, replacing any existing object."""

    @abstractmethod
    def object_exists(
        self, bucket: str, key: str, *, ctx: Optional[CallContext] = None
    ) -> bool:
        """Return True if an object exists."""
