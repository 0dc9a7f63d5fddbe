"""
Clock primitives for transitions

PeriodicClock delivers ticks from its own daemon thread; Stopwatch measures
elapsed time since a transition started.
"""

import threading
import time
from typing import Callable, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CLOCK)


class Stopwatch:
    """Monotonic elapsed-time counter"""

    def __init__(self):
        self._started_at: Optional[float] = None

    def start(self) -> None:
        self._started_at = time.perf_counter()

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        return (time.perf_counter() - self._started_at) * 1000


class PeriodicClock:
    """
    Background thread that calls `callback` every interval_ms

    Ticks are only delivered while `enabled` is True; the consumer clears it
    for the duration of a tick and sets it again when ready for the next one.
    The wait restarts after each callback returns, so a slow tick delays the
    next one instead of queueing ticks behind it.

    A callback that raises stops the clock.

    Example:
        clock = PeriodicClock(10, on_tick)
        clock.start()
        ...
        clock.stop()
    """

    def __init__(self, interval_ms: float, callback: Callable[[], None], name: str = "TransitionClock"):
        self.interval_ms = interval_ms
        self.callback = callback
        self.name = name

        self.enabled = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        """Start the clock thread (no-op if already running)"""
        if self._thread and self._thread.is_alive():
            return

        self._stop_event.clear()
        self.enabled = True
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=self.name
        )
        self._thread.start()
        log.debug("Clock started", name=self.name, interval_ms=self.interval_ms)

    def stop(self) -> None:
        """
        Stop delivering ticks

        Safe to call from inside the callback: the thread exits after the
        current tick returns. Use join() to wait for that.
        """
        self.enabled = False
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        interval = self.interval_ms / 1000
        ticks = 0

        while not self._stop_event.wait(interval):
            if not self.enabled:
                continue

            try:
                self.callback()
                ticks += 1
            except Exception as ex:
                log.error("Clock callback failed, stopping clock", name=self.name, error=str(ex), error_type=type(ex).__name__)
                self.stop()
                break

        log.debug("Clock stopped", name=self.name, ticks=ticks)
