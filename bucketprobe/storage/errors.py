"""Error taxonomy shared by every storage backend adapter."""

from __future__ import annotations

from typing import Optional


class StorageError(Exception):
    """Base class for every error raised by the storage layer."""


class StorageValidationError(StorageError, ValueError):
    """Raised before any backend call when an argument is unusable."""


class BackendError(StorageError):
    """A backend call failed.

    The original exception is chained as ``__cause__``; ``status_code`` and
    ``code`` expose whatever status signal the backend attached to it so that
    callers never have to downcast to a specific SDK's error type.
    """

    def __init__(
        self,
        operation: str,
        bucket: str,
        key: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        detail: str = "",
    ) -> None:
        self.operation = operation
        self.bucket = bucket
        self.key = key
        self.status_code = status_code
        self.code = code
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        target = f"bucket={self.bucket}"
        if self.key is not None:
            target += f" key={self.key}"
        message = f"{self.operation} failed ({target})"
        if self.status_code is not None:
            message += f" status={self.status_code}"
        if self.code:
            message += f" code={self.code}"
        if self.detail:
            message += f": {self.detail}"
        return message

    @classmethod
    def from_exception(
        cls,
        operation: str,
        bucket: str,
        key: Optional[str],
        exc: BaseException,
    ) -> "BackendError":
        return cls(
            operation,
            bucket,
            key,
            status_code=status_code_of(exc),
            code=code_of(exc),
            detail=str(exc) or type(exc).__name__,
        )


class ObjectProbeError(BackendError):
    """The existence probe failed for a reason other than "not found"."""


class OperationCancelledError(StorageError):
    """The caller cancelled the operation before it completed."""

    def __init__(self, operation: str, reason: str = "cancelled") -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} {reason}")


class DeadlineExceededError(OperationCancelledError):
    """The caller's deadline passed before the operation completed."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, reason="deadline exceeded")


def status_code_of(exc: BaseException) -> Optional[int]:
    """Return the protocol status code carried by ``exc``, if any.

    Looks for an integer ``status_code`` attribute first (our own
    ``BackendError`` and MinIO's ``ServerError``), then for an HTTP response
    with a ``status`` (MinIO's ``S3Error``).
    """
    status = getattr(exc, "status_code", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    response = getattr(exc, "response", None)
    status = getattr(response, "status", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return None


def code_of(exc: BaseException) -> Optional[str]:
    code = getattr(exc, "code", None)
    return code if isinstance(code, str) and code else None
