"""Where: src/soundsocial/platform/musicbrainz/rate_limit.py
What: Thread-safe gate enforcing spacing between outbound MusicBrainz requests.
Why: MusicBrainz asks anonymous clients to limit traffic to roughly 1 request per second.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Final


class RateLimiter:
    """Serialize request starts so consecutive dispatches are spaced apart.

    One instance is shared by every caller of a client; the lock is held while
    sleeping so concurrent callers queue up instead of bursting together.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must not be negative")
        self._min_interval: float = min_interval_seconds
        self._clock: Callable[[], float] = clock
        self._sleep: Callable[[float], None] = sleep
        self._lock: Final[threading.Lock] = threading.Lock()
        self._last_start: float | None = None

    @property
    def min_interval_seconds(self) -> float:
        return self._min_interval

    def respect(self) -> float:
        """Delay the caller until the spacing constraint is met.

        Returns:
            float: Seconds actually waited.
        """

        with self._lock:
            waited = 0.0
            if self._last_start is not None:
                wait = self._min_interval - (self._clock() - self._last_start)
                if wait > 0:
                    self._sleep(wait)
                    waited = wait
            self._last_start = self._clock()
            return waited


__all__ = ["RateLimiter"]
