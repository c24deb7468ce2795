"""
Rate limiting for repeated log lines.

A persistent condition (e.g. a disk staying below its free space floor) is
re-detected on every refresh cycle. DespamLimiter remembers when each tag was
last emitted and only lets the same tag through once per interval, no matter
how often the condition is re-checked.
"""

import logging
import time
from datetime import timedelta
from typing import Any, Callable, Dict, Optional


class DespamLimiter:
    def __init__(
        self,
        interval: timedelta,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._interval_seconds = interval.total_seconds()
        self._clock = clock
        self._last_emitted: Dict[str, float] = {}

    @property
    def interval(self) -> timedelta:
        return timedelta(seconds=self._interval_seconds)

    def should_emit(self, tag: str) -> bool:
        """Return True and record the emission if `tag` is outside its interval."""
        now = self._clock()
        last = self._last_emitted.get(tag)

        if last is not None and now - last < self._interval_seconds:
            return False

        self._last_emitted[tag] = now
        return True

    def log(
        self,
        tag: str,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Log `message` through the root logger unless `tag` is despammed."""
        if not self.should_emit(tag):
            return False

        logging.log(level, message, extra=extra)
        return True

    def reset(self, tag: Optional[str] = None) -> None:
        if tag is None:
            self._last_emitted.clear()
        else:
            self._last_emitted.pop(tag, None)
