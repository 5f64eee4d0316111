"""Cancellable recurring timer running on a daemon thread."""

import threading
from collections.abc import Callable
from typing import Final


class RepeatingTimer:
    """Invokes a callback every ``interval`` seconds until stopped.

    The first call happens one full interval after ``start``. A callback that
    raises ends the timer thread; callers that want to keep going must handle
    their own errors.

    Attributes:
        interval:   Seconds between two callback invocations
        callback:   Zero-argument callable run on the timer thread
        name:       Thread name, shown in tracebacks and thread dumps
    """

    def __init__(
            self,
            interval: float,
            callback: Callable[[], object],
            name: str = "repeating-timer"
    ) -> None:
        if interval <= 0:
            msg = f"interval must be positive, got {interval!r}"
            raise ValueError(msg)

        self.interval = interval
        self.callback = callback
        self.name = name
        self._stopped: Final = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock: Final = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the timer thread. Does nothing if it is already running."""
        with self._lock:
            if self.running:
                return
            self._stopped.clear()
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Cancel the timer and wait for an in-flight callback to finish.

        Safe to call more than once, and from inside the callback itself.

        Args:
            timeout: Optional upper bound in seconds on the wait
        """
        with self._lock:
            self._stopped.set()
            thread = self._thread

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.callback()

    def __repr__(self) -> str:
        return f"RepeatingTimer(name={self.name!r}, interval={self.interval!r}, running={self.running})"
