"""Console diagnostic stream for operational notices.

Refresh notices and background-timer failures are reported here rather than in
the log file. The stream is structlog on top of the standard library logging
module, rendered to stderr with colors and rich tracebacks.

The module enforces a single-configuration pattern where the stream can only be
configured once. If a logger is requested before configuration, a console-only
fallback with default settings is installed.
"""

import logging
import sys
import threading
from typing import Final

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from .config import DiagnosticsConfig

DIAGNOSTICS_LOGGER_NAME: Final = "refresh_logger"
DEFAULT_TIMESTAMP_FORMAT: Final = "%Y-%m-%d %H:%M:%S"


class DiagnosticsState:
    """Tracks whether the diagnostic stream has been configured.

    Attributes:
        _config:    Applied configuration, None until configured
        _fallback:  True once the console-only fallback has been installed
        _lock:      Threading lock for thread-safe state modifications
    """

    def __init__(self) -> None:
        self._config: DiagnosticsConfig | None = None
        self._fallback = False
        self._lock: Final = threading.Lock()

    def is_configured(self) -> bool:
        return self._config is not None

    def set_config(self, config: DiagnosticsConfig) -> None:
        """Record the applied configuration.

        Raises:
            RuntimeError: If the stream has already been configured
        """
        with self._lock:
            if self.is_configured():
                msg = (
                    "Diagnostics have already been configured. "
                    "configure_diagnostics() should only be called once."
                )
                raise RuntimeError(msg)
            self._config = config

    def claim_fallback(self) -> bool:
        """Return True exactly once, for the caller that installs the fallback."""
        with self._lock:
            if self._fallback or self.is_configured():
                return False
            self._fallback = True
            return True

    def reset(self) -> None:
        with self._lock:
            self._config = None
            self._fallback = False


_state: Final = DiagnosticsState()


def create_shared_processors() -> list[Processor]:
    """Create the list of shared structlog processors.

    Returns:
        List of structlog processors applied before rendering
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt=DEFAULT_TIMESTAMP_FORMAT, utc=False),
    ]


def create_console_handler(
        config: DiagnosticsConfig,
        shared_processors: list[Processor]
) -> logging.Handler:
    """Create a stderr handler rendering records through structlog.

    Args:
        config:             Diagnostics configuration settings
        shared_processors:  List of shared structlog processors to use

    Returns:
        Configured StreamHandler instance
    """
    exception_formatter = (
        structlog.dev.rich_traceback if config.rich_tracebacks
        else structlog.dev.plain_traceback
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(
                colors=config.colors,
                exception_formatter=exception_formatter
            ),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def configure_diagnostics(config: DiagnosticsConfig | None = None) -> None:
    """Configure the diagnostic stdlib logger.

    Can only be called once per process. Only the ``refresh_logger`` logger
    hierarchy is touched; the global structlog configuration is left to the
    host application.

    Args:
        config: Optional diagnostics settings; defaults are used when omitted

    Raises:
        RuntimeError: If diagnostics have already been configured
    """
    config = config if config is not None else DiagnosticsConfig()
    _state.set_config(config)
    _install_handler(config)


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structlog logger writing to the diagnostic stream.

    The logger wraps a stdlib logger with its own processor chain, so it works
    regardless of how the host has configured structlog. Names outside the
    ``refresh_logger`` hierarchy do not reach the diagnostic handler.
    If diagnostics haven't been configured yet, installs console-only defaults.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        BoundLogger instance
    """
    if _state.claim_fallback():
        _install_handler(DiagnosticsConfig())

    return structlog.wrap_logger(
        logging.getLogger(name or DIAGNOSTICS_LOGGER_NAME),
        processors=[
            *create_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def reset_diagnostics() -> None:
    """Forget the applied configuration and reinstall console-only defaults."""
    _state.reset()
    logging.getLogger(DIAGNOSTICS_LOGGER_NAME).handlers.clear()
    get_logger()


def _install_handler(config: DiagnosticsConfig) -> None:
    """Install the console handler on the package logger.

    Args:
        config: Diagnostics settings to apply
    """
    handler = create_console_handler(config, create_shared_processors())

    package_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    package_logger.handlers.clear()  # We only want our handler
    package_logger.addHandler(handler)
    package_logger.propagate = False
    package_logger.setLevel(config.level)
