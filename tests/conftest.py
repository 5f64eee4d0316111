import logging
import re
from pathlib import Path

import pytest

from refresh_logger.diagnostics import DIAGNOSTICS_LOGGER_NAME, reset_diagnostics

LINE_PATTERN = re.compile(r"\[(DEBUG|INFO|WARN|ERROR)\] - \d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z - .*\n")
MARKER_PATTERN = re.compile(r"\[INFO\] Log file refreshed at \d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\n")


def read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines(keepends=True)


class EventCollector(logging.Handler):
    """Keeps the structlog event dicts that reach the diagnostic logger."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.events.append({"event": record.msg["event"], "log_level": record.levelname.lower()})


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logger.txt"


@pytest.fixture
def diagnostic_events():
    collector = EventCollector()
    package_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    package_logger.addHandler(collector)
    yield collector.events
    package_logger.removeHandler(collector)


@pytest.fixture
def fresh_diagnostics():
    reset_diagnostics()
    yield
    reset_diagnostics()
