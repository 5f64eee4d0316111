import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest
import structlog

from refresh_logger.config import DiagnosticsConfig
from refresh_logger.diagnostics import (
    DIAGNOSTICS_LOGGER_NAME,
    configure_diagnostics,
    get_logger,
    reset_diagnostics,
)

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


@pytest.fixture
def host_structlog_config():
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


def test_import_keeps_host_structlog_configuration():
    script = textwrap.dedent(
        """
        import structlog

        structlog.configure(processors=[structlog.processors.JSONRenderer()])
        before = list(structlog.get_config()["processors"])

        import refresh_logger

        refresh_logger.get_logger("refresh_logger.host").info("diagnostic notice")
        after = list(structlog.get_config()["processors"])
        print(len(before), len(after), before == after)
        """
    )
    env = {**os.environ, "PYTHONPATH": os.pathsep.join([str(SRC_DIR), os.environ.get("PYTHONPATH", "")])}

    result = subprocess.run(
        [sys.executable, "-c", script], capture_output=True, text=True, env=env, check=True
    )

    assert result.stdout.split() == ["1", "1", "True"]


def test_diagnostics_leave_host_processors_untouched(host_structlog_config, fresh_diagnostics, diagnostic_events):
    host_processors = [structlog.processors.JSONRenderer()]
    structlog.configure(processors=host_processors)

    get_logger("refresh_logger.tests").info("still routed")

    assert structlog.get_config()["processors"] == host_processors
    assert {"event": "still routed", "log_level": "info"} in diagnostic_events


def test_configure_diagnostics_only_once(fresh_diagnostics):
    configure_diagnostics()
    with pytest.raises(RuntimeError, match="already been configured"):
        configure_diagnostics()


def test_configure_diagnostics_applies_level(fresh_diagnostics):
    configure_diagnostics(DiagnosticsConfig(level="WARNING"))
    assert logging.getLogger(DIAGNOSTICS_LOGGER_NAME).level == logging.WARNING


def test_reset_reinstalls_console_fallback(fresh_diagnostics):
    reset_diagnostics()

    package_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    stream_handlers = [h for h in package_logger.handlers if isinstance(h, logging.StreamHandler)]
    assert stream_handlers
    assert stream_handlers[0].stream is sys.stderr
    assert not package_logger.propagate
