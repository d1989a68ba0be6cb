"""Backend-agnostic object store adapter."""

from __future__ import annotations

import io
import logging
from typing import Callable, Optional, TypeVar

from bucketprobe.storage.base import Content, StorageAdapter, StorageBackend
from bucketprobe.storage.context import CallContext
from bucketprobe.storage.errors import (
    BackendError,
    ObjectProbeError,
    OperationCancelledError,
    StorageValidationError,
)
from bucketprobe.storage.probe import ProbeOutcome, classify_probe

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _require_name(kind: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise StorageValidationError(f"{kind} must be a non-empty string, got: {value!r}")


def _require_content(data: Content) -> None:
    if data is None:
        raise StorageValidationError("object content must not be None")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise StorageValidationError(
            f"object content must be bytes-like, got: {type(data).__name__}"
        )


class ObjectStore(StorageAdapter):
    """Thin wrapper that borrows a backend connection for each call.

    The store keeps nothing but the backend handle, so one instance can be
    reused for any number of calls. It adds no locking of its own; concurrent
    use is safe exactly when the backend is.
    """

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def _invoke(
        self, operation: str, ctx: Optional[CallContext], call: Callable[[], T]
    ) -> T:
        if ctx is None:
            return call()
        return ctx.run(operation, call)

    def ensure_bucket(self, bucket: str, *, ctx: Optional[CallContext] = None) -> None:
        _require_name("bucket", bucket)
        logger.debug("make_bucket bucket=%s", bucket)
        try:
            self._invoke(
                "make_bucket", ctx, lambda: self._backend.make_bucket(bucket_name=bucket)
            )
        except (BackendError, OperationCancelledError):
            raise
        except Exception as exc:
            raise BackendError.from_exception("make_bucket", bucket, None, exc) from exc

    def put_object(
        self, bucket: str, key: str, data: Content, *, ctx: Optional[CallContext] = None
    ) -> None:
        _require_name("bucket", bucket)
        _require_name("key", key)
        _require_content(data)
        payload = bytes(data)
        logger.debug("put_object bucket=%s key=%s size=%d", bucket, key, len(payload))
        try:
            self._invoke(
                "put_object",
                ctx,
                lambda: self._backend.put_object(
                    bucket_name=bucket,
                    object_name=key,
                    data=io.BytesIO(payload),
                    length=len(payload),
                ),
            )
        except (BackendError, OperationCancelledError):
            raise
        except Exception as exc:
            raise BackendError.from_exception("put_object", bucket, key, exc) from exc

    def object_exists(
        self, bucket: str, key: str, *, ctx: Optional[CallContext] = None
    ) -> bool:
        _require_name("bucket", bucket)
        _require_name("key", key)
        logger.debug("stat_object bucket=%s key=%s", bucket, key)
        try:
            self._invoke(
                "stat_object",
                ctx,
                lambda: self._backend.stat_object(bucket_name=bucket, object_name=key),
            )
        except OperationCancelledError:
            raise
        except Exception as exc:
            outcome = classify_probe(exc)
            if outcome is ProbeOutcome.ABSENT:
                return False
            logger.warning("Existence probe failed for %s/%s: %s", bucket, key, exc)
            raise ObjectProbeError.from_exception("stat_object", bucket, key, exc) from exc
        return True
