"""Cancellation and deadline signal passed into storage calls."""

from __future__ import annotations

import threading
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Optional, TypeVar

from bucketprobe.storage.errors import DeadlineExceededError, OperationCancelledError

T = TypeVar("T")

# Upper bound on how long a waiting caller can miss a cancel() call.
_POLL_INTERVAL = 0.05


class CallContext:
    """Caller-owned cancellation signal with an optional deadline.

    A context can be shared between threads and cancelled from any of them.
    Storage calls never impose a timeout of their own; a deadline only exists
    when the caller creates the context with one.
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CallContext":
        if seconds < 0:
            raise ValueError(f"timeout must be >= 0, got: {seconds}")
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` if there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self, operation: str) -> None:
        if self.cancelled:
            raise OperationCancelledError(operation)
        if self.expired():
            raise DeadlineExceededError(operation)

    def run(self, operation: str, fn: Callable[[], T]) -> T:
        """Run a blocking call, returning early if the context is cancelled.

        The call runs on a single-use worker thread. If the context is
        cancelled or its deadline passes first, the caller gets a
        cancellation error straight away and the abandoned call's result is
        discarded.
        """
        self.check(operation)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="bucketprobe")
        try:
            future = executor.submit(fn)
            while True:
                timeout = _POLL_INTERVAL
                remaining = self.remaining()
                if remaining is not None:
                    timeout = min(timeout, remaining)
                done, _ = wait([future], timeout=timeout, return_when=FIRST_COMPLETED)
                if done:
                    break
                self.check(operation)
            return future.result()
        finally:
            executor.shutdown(wait=False)
