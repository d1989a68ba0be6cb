from bucketprobe.storage.base import StorageAdapter, StorageBackend
from bucketprobe.storage.context import CallContext
from bucketprobe.storage.errors import (
    BackendError,
    DeadlineExceededError,
    ObjectProbeError,
    OperationCancelledError,
    StorageError,
    StorageValidationError,
)
from bucketprobe.storage.minio_s3 import MinioStorage, build_minio_client
from bucketprobe.storage.object_store import ObjectStore
from bucketprobe.storage.probe import ProbeOutcome, classify_probe

__all__ = [
    "BackendError",
    "CallContext",
    "DeadlineExceededError",
    "MinioStorage",
    "ObjectProbeError",
    "ObjectStore",
    "OperationCancelledError",
    "ProbeOutcome",
    "StorageAdapter",
    "StorageBackend",
    "StorageError",
    "StorageValidationError",
    "build_minio_client",
    "classify_probe",
]
