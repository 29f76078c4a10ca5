"""One-shot timer used to hide transient notices."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

TimerFactory = Callable[..., Any]


class NoticeTimer:
    """A restartable one-shot timer.

    Starting the timer cancels any pending run first, so only the most
    recent start ever fires.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[..., None],
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.delay = delay
        self._callback = callback
        self._timer_factory = timer_factory
        self._timer: Any = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """Whether a started timer has not fired or been cancelled yet."""
        with self._lock:
            return self._timer is not None and self._timer.is_alive()

    def start(self, *args: Any) -> None:
        """(Re)start the timer; ``args`` are passed to the callback."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(self.delay, self._callback, args=args)
            timer.daemon = True
            timer.start()
            self._timer = timer

    def cancel(self) -> None:
        """Cancel the pending run, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
