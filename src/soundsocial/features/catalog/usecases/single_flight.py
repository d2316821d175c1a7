"""Coalesce concurrent calls that share a key into one execution."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Generic, TypeVar, final

T = TypeVar("T")


@final
class SingleFlight(Generic[T]):
    """Run ``fn`` once per key among overlapping callers.

    The first caller for a key executes ``fn``; callers arriving while it runs
    block and receive the same result or exception. Completed calls are not
    remembered, so the next call after completion executes again.
    """

    def __init__(self) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._calls: dict[str, Future[T]] = {}

    def run(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if future is None:
                future = Future()
                self._calls[key] = future

        if not leader:
            return future.result()

        try:
            result = fn()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                _ = self._calls.pop(key, None)

    def in_flight(self) -> int:
        with self._lock:
            return len(self._calls)


__all__ = ["SingleFlight"]
