"""Cancellable one-shot timer that clears a stale edit error."""

from __future__ import annotations

import logging
import time
from typing import Callable

LOGGER = logging.getLogger(__name__)

ERROR_CLEAR_DELAY = 3.0


class ErrorClearTimer:
    """Run ``callback`` once ``delay`` seconds after :meth:`start`.

    The host polls :meth:`tick` from its event loop; nothing runs in the
    background, so a cancelled timer can never fire late.
    """

    def __init__(
        self,
        *,
        delay: float = ERROR_CLEAR_DELAY,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        delay = float(delay)
        if delay <= 0.0:
            raise ValueError("error clear delay must be positive")
        self.delay = delay
        self._time_source = time_source or time.monotonic
        self._deadline: float | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def start(self, callback: Callable[[], None]) -> None:
        """Arm the timer, replacing any callback that has not fired yet."""

        self._deadline = self._time_source() + self.delay
        self._callback = callback
        LOGGER.debug("error clear timer armed for %.2fs", self.delay)

    def cancel(self) -> None:
        if self._deadline is not None:
            LOGGER.debug("error clear timer cancelled")
        self._deadline = None
        self._callback = None

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._time_source())

    def tick(self) -> bool:
        """Fire the callback if the deadline passed; return whether it fired."""

        if self._deadline is None or self._time_source() < self._deadline:
            return False
        callback = self._callback
        self._deadline = None
        self._callback = None
        if callback is not None:
            callback()
        return True


__all__ = ["ERROR_CLEAR_DELAY", "ErrorClearTimer"]
