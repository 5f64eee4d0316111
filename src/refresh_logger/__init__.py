"""Leveled file logging with timed truncation and memory sampling.

This package appends leveled log lines to a plain text file and truncates that
file on a fixed cadence, leaving a single marker line behind. A separate
sampler can log the share of free system memory on its own interval. Operational
notices go to a structlog console stream on stderr, never into the log file.

Basic Usage:
    ```python
    from refresh_logger import MemorySampler, RefreshingLogger

    with RefreshingLogger(log_file="logger.log", refresh_interval="10s") as logger:
        logger.log("Application started")          # INFO is the default
        logger.warn("Disk almost full")
        logger.log("Verbose detail", "DEBUG")

        with MemorySampler(logger):
            ...
    ```

Line Format:
    ```text
    [INFO] - 2026-10-19T08:15:30.123Z - Application started
    [INFO] Log file refreshed at 2026-10-19T08:15:40.125Z
    ```

Configuration:
    The bootstrap (``python -m refresh_logger --config app.toml``) reads:

    ```toml
    [logger]
    log_file = "logger.log"
    refresh_interval = "10s"   # <digits><s|m|h|d>
    encoding = "utf-8"

    [sampler]
    enabled = true
    interval = "3s"

    [diagnostics]
    level = "INFO"
    colors = true
    rich_tracebacks = true
    ```

Implementation Notes:
    - Writes are synchronous; when ``log`` returns the line is in the file
    - Timer callbacks and callers share one lock, so lines never interleave
    - Refresh failures on the timer thread are reported to stderr and retried
      on the next tick; failures in direct calls propagate as ``OSError``
    - Timers run on daemon threads and stop with ``stop()`` or a ``with`` block
"""

from .config import AppConfig, LoggerConfig, SamplerConfig
from .diagnostics import configure_diagnostics, get_logger
from .errors import ConfigError, InvalidIntervalFormat, InvalidLogLevel, RefreshLoggerError
from .interval import parse_interval
from .log_levels import LogLevel
from .logger import RefreshingLogger
from .memory import MemorySampler

__all__ = [
    "AppConfig",
    "ConfigError",
    "InvalidIntervalFormat",
    "InvalidLogLevel",
    "LogLevel",
    "LoggerConfig",
    "MemorySampler",
    "RefreshLoggerError",
    "RefreshingLogger",
    "SamplerConfig",
    "configure_diagnostics",
    "get_logger",
    "parse_interval",
]
