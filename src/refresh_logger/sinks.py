"""Log events, line formatting and the file sink.

Every line appended to the log file has the shape
``[LEVEL] - <timestamp> - <message>``, except the marker written after a
refresh which reads ``[INFO] Log file refreshed at <timestamp>``.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from .log_levels import INFO, LogLevel


@dataclass(frozen=True, slots=True)
class LogEvent:
    """A single log call, handed to each sink and then discarded.

    Attributes:
        message:    Text of the log call
        level:      Validated severity tag
    """

    message: str
    level: LogLevel


class Sink(Protocol):
    """Anything that can receive log events."""

    def write(self, event: LogEvent) -> None: ...


def iso_timestamp(now: datetime | None = None) -> str:
    """Format a UTC timestamp as ISO-8601 with millisecond precision.

    Args:
        now: Optional moment to format; the current time is used when omitted

    Returns:
        Timestamp such as ``2026-10-19T08:15:30.123Z``
    """
    now = now if now is not None else datetime.now(timezone.utc)
    utc = now.astimezone(timezone.utc)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def format_line(event: LogEvent, timestamp: str | None = None) -> str:
    """Render an event as a log file line, newline included."""
    timestamp = timestamp if timestamp is not None else iso_timestamp()
    return f"[{event.level}] - {timestamp} - {event.message}\n"


def format_refresh_marker(timestamp: str | None = None) -> str:
    """Render the line that seeds the log file after a refresh."""
    timestamp = timestamp if timestamp is not None else iso_timestamp()
    return f"[{INFO}] Log file refreshed at {timestamp}\n"


class FileSink:
    """Appends formatted events to a plain text file.

    The file is opened per write and closed right after, so the append has
    reached the operating system when ``write`` returns. Missing files are
    created on first write; the parent directory must exist.

    Attributes:
        path:       Log file location
        encoding:   Character encoding used for every write
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def write(self, event: LogEvent) -> None:
        """Append one formatted line for the event.

        Raises:
            OSError: If the file cannot be opened or written
        """
        self._append(format_line(event))

    def refresh(self) -> None:
        """Truncate the file and seed it with a single refresh marker line.

        Raises:
            OSError: If the file cannot be opened or written
        """
        with self.path.open("w", encoding=self.encoding) as f:
            f.write(format_refresh_marker())

    def _append(self, line: str) -> None:
        with self.path.open("a", encoding=self.encoding) as f:
            f.write(line)

    def __repr__(self) -> str:
        return f"FileSink(path={str(self.path)!r})"
