"""The refreshing file logger.

A ``RefreshingLogger`` validates leveled log calls, hands each one to its sinks
in registration order and owns a recurring timer that truncates the log file.
All writes happen synchronously on the calling thread under a shared lock, so
by the time ``log`` returns the line is in the file, and lines written from
timer threads never interleave with lines written by callers.
"""

import threading
from pathlib import Path
from typing import Final

from .config import LoggerConfig
from .diagnostics import get_logger
from .errors import InvalidLogLevel
from .log_levels import DEBUG, ERROR, INFO, VALID_LOG_LEVELS, WARN, LogLevel
from .sinks import FileSink, LogEvent, Sink
from .timer import RepeatingTimer

diagnostics = get_logger(__name__)


class RefreshingLogger:
    """Leveled logger writing to a file that is truncated on a fixed cadence.

    The refresh timer starts on construction unless ``autostart`` is False.
    Use ``stop()`` or a ``with`` block to cancel it.

    Attributes:
        config:         Effective logger configuration
        log_file:       Path of the log file
        refresh_interval: Refresh interval in milliseconds
    """

    Levels: Final = VALID_LOG_LEVELS

    def __init__(
            self,
            config: LoggerConfig | None = None,
            *,
            log_file: str | Path | None = None,
            refresh_interval: str | None = None,
            autostart: bool = True
    ) -> None:
        """Build the logger and, unless told otherwise, start the refresh timer.

        Keyword options override the matching fields of ``config``.

        Args:
            config:             Optional base configuration
            log_file:           Optional log file path override
            refresh_interval:   Optional interval spec override
            autostart:          Start the refresh timer right away

        Raises:
            InvalidIntervalFormat: If the refresh interval is not a valid spec
        """
        config = config if config is not None else LoggerConfig()
        self.config = LoggerConfig(
            log_file=Path(log_file) if log_file is not None else config.log_file,
            refresh_interval=(
                refresh_interval if refresh_interval is not None
                else config.refresh_interval
            ),
            encoding=config.encoding,
        )

        self.log_file = self.config.log_file
        self.refresh_interval = self.config.refresh_interval_ms

        self._lock: Final = threading.RLock()
        self._file_sink = FileSink(self.log_file, encoding=self.config.encoding)
        self._sinks: list[Sink] = [self._file_sink]
        self._timer = RepeatingTimer(
            self.refresh_interval / 1000,
            self._refresh_from_timer,
            name=f"log-refresh:{self.log_file.name}",
        )

        if autostart:
            self.start()

    @property
    def running(self) -> bool:
        """True while the refresh timer is active."""
        return self._timer.running

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return tuple(self._sinks)

    def add_sink(self, sink: Sink) -> None:
        """Register an extra sink, invoked after the existing ones."""
        with self._lock:
            self._sinks.append(sink)

    def start(self) -> None:
        """Start the refresh timer. Does nothing if it is already running."""
        self._timer.start()
        diagnostics.debug(
            "Refresh timer started",
            log_file=str(self.log_file),
            interval_ms=self.refresh_interval,
        )

    def stop(self, timeout: float | None = None) -> None:
        """Cancel the refresh timer. Safe to call more than once."""
        self._timer.stop(timeout)

    def log(self, message: str, level: LogLevel = INFO) -> None:
        """Write a message at the given level.

        Args:
            message:    Text to log
            level:      One of DEBUG, INFO, WARN, ERROR (default INFO)

        Raises:
            InvalidLogLevel: If level is not one of the recognized levels
            OSError: If a sink fails to write
        """
        if level not in VALID_LOG_LEVELS:
            raise InvalidLogLevel(level, VALID_LOG_LEVELS)

        event = LogEvent(message=message, level=level)
        with self._lock:
            for sink in self._sinks:
                sink.write(event)

    def debug(self, message: str) -> None:
        self.log(message, DEBUG)

    def warn(self, message: str) -> None:
        self.log(message, WARN)

    def error(self, message: str) -> None:
        self.log(message, ERROR)

    def refresh_file(self) -> None:
        """Truncate the log file and leave a single refresh marker line.

        Raises:
            OSError: If the file cannot be written
        """
        diagnostics.info(f"Refreshing the log file: {self.log_file}")
        with self._lock:
            self._file_sink.refresh()

    def _refresh_from_timer(self) -> None:
        # Timer-driven failures are reported and the timer keeps its cadence
        try:
            self.refresh_file()
        except OSError:
            diagnostics.exception("Log file refresh failed", log_file=str(self.log_file))

    def __enter__(self) -> "RefreshingLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def __repr__(self) -> str:
        return (
            f"RefreshingLogger(log_file={str(self.log_file)!r}, "
            f"refresh_interval={self.config.refresh_interval!r}, running={self.running})"
        )
