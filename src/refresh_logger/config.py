"""Configuration handling for the refreshing logger.

This module provides configuration classes and TOML parsing functionality for the
log file writer, the memory sampler and the diagnostic console stream. Every
section and key is optional; missing values fall back to defaults.
"""

import codecs
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .errors import ConfigError
from .interval import parse_interval

DEFAULT_LOG_FILE: Final = "logger.txt"
DEFAULT_REFRESH_INTERVAL: Final = "1d"
DEFAULT_SAMPLE_INTERVAL: Final = "3s"

# Levels accepted by the stdlib logging module behind the diagnostic stream
DIAGNOSTIC_LEVELS: Final = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _validate_timer_interval(name: str, spec: str) -> None:
    """Check that an interval spec is valid and long enough to drive a timer.

    Raises:
        InvalidIntervalFormat: If the spec does not match the interval pattern
        ValueError: If the interval is zero
    """
    if parse_interval(spec) > 0:
        return
    msg = f"{name} must be longer than zero, got {spec!r}"
    raise ValueError(msg)


def _section(config_data: dict, name: str) -> dict:
    """Return an optional TOML table, or an empty dict when it is absent.

    Raises:
        TypeError: If the key holds something other than a table
    """
    section = config_data.get(name, {})
    if isinstance(section, dict):
        return section
    msg = f"[{name}] must be a table, got {type(section).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class LoggerConfig:
    """Configuration for the log file writer.

    Attributes:
        log_file:           Path of the log file (created on first write)
        refresh_interval:   Interval spec between two truncations of the file
        encoding:           Character encoding for the log file (default: utf-8)
    """

    log_file: Path = Path(DEFAULT_LOG_FILE)
    refresh_interval: str = DEFAULT_REFRESH_INTERVAL
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Normalize the path and validate the interval and encoding.

        Raises:
            InvalidIntervalFormat: If refresh_interval is not a valid interval spec
            ValueError: If the interval is zero or the encoding is unknown
        """
        object.__setattr__(self, "log_file", Path(self.log_file))
        _validate_timer_interval("refresh_interval", self.refresh_interval)

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            msg = f"Unknown log file encoding: {self.encoding!r}"
            raise ValueError(msg) from e

    @property
    def refresh_interval_ms(self) -> int:
        """Refresh interval in milliseconds."""
        return parse_interval(self.refresh_interval)


@dataclass(frozen=True, slots=True)
class SamplerConfig:
    """Configuration for the memory sampler.

    Attributes:
        enabled:    Start the sampler at bootstrap
        interval:   Interval spec between two samples
    """

    enabled: bool = True
    interval: str = DEFAULT_SAMPLE_INTERVAL

    def __post_init__(self) -> None:
        _validate_timer_interval("interval", self.interval)


@dataclass(frozen=True, slots=True)
class DiagnosticsConfig:
    """Configuration for the console diagnostic stream.

    Attributes:
        level:              Minimum stdlib logging level to render
        colors:             Enable colored output (requires 'colorama' on Windows)
        rich_tracebacks:    Enable rich tracebacks formatting (requires 'rich' library)
    """

    level: str = "INFO"
    colors: bool = True
    rich_tracebacks: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values after initialization.

        Raises:
            ValueError: If the diagnostic level is invalid
        """
        if self.level in DIAGNOSTIC_LEVELS:
            return
        msg = (
            f"Invalid diagnostic level: {self.level!r}. "
            f"Must be one of: {', '.join(sorted(DIAGNOSTIC_LEVELS))}"
        )
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Complete application configuration.

    Attributes:
        logger:         LoggerConfig for the log file writer
        sampler:        SamplerConfig for the memory sampler
        diagnostics:    DiagnosticsConfig for the console stream
    """

    logger: LoggerConfig = field(default_factory=LoggerConfig)
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    @classmethod
    def from_toml(cls, config_path: Path) -> "AppConfig":
        """Create an AppConfig instance from a TOML configuration file.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Configured AppConfig instance

        Raises:
            ConfigError: If the file is missing, malformed or holds invalid values
        """
        config_data = cls._load_toml(Path(config_path))

        try:
            return cls._parse_config(config_data)

        except (TypeError, ValueError) as e:
            msg = f"Invalid value in configuration file {config_path}: {e!s}"
            raise ConfigError(msg) from e

    @classmethod
    def _load_toml(cls, config_path: Path) -> dict:
        """Load and parse the TOML configuration file.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Parsed configuration dictionary

        Raises:
            ConfigError: If the file doesn't exist or the TOML is malformed
        """
        try:
            with config_path.open("rb") as f:
                return tomllib.load(f)

        except FileNotFoundError as e:
            msg = f"Configuration file not found: {config_path}"
            raise ConfigError(msg) from e

        except tomllib.TOMLDecodeError as e:
            msg = f"Failed to parse TOML file {config_path}"
            raise ConfigError(msg) from e

    @classmethod
    def _parse_config(cls, config_data: dict) -> "AppConfig":
        """Parse the configuration dictionary into an AppConfig instance.

        Args:
            config_data: Dictionary containing the configuration data

        Returns:
            Configured AppConfig instance
        """
        logger_config = _section(config_data, "logger")
        sampler_config = _section(config_data, "sampler")
        diagnostics_config = _section(config_data, "diagnostics")

        return cls(
            logger=LoggerConfig(
                log_file=Path(logger_config.get("log_file", DEFAULT_LOG_FILE)),
                refresh_interval=logger_config.get(
                    "refresh_interval", DEFAULT_REFRESH_INTERVAL
                ),
                encoding=logger_config.get("encoding", "utf-8"),
            ),
            sampler=SamplerConfig(
                enabled=bool(sampler_config.get("enabled", True)),
                interval=sampler_config.get("interval", DEFAULT_SAMPLE_INTERVAL),
            ),
            diagnostics=DiagnosticsConfig(
                level=str(diagnostics_config.get("level", "INFO")).upper(),
                colors=bool(diagnostics_config.get("colors", True)),
                rich_tracebacks=bool(diagnostics_config.get("rich_tracebacks", True)),
            ),
        )

    @classmethod
    def create_default(cls) -> "AppConfig":
        """Create the default bootstrap configuration.

        Creates a configuration matching the stock composition:
        - Log file ``logger.log`` refreshed every 10 seconds
        - Memory sampler enabled, sampling every 3 seconds
        - INFO diagnostics with colors and rich tracebacks

        Returns:
            AppConfig instance with default settings
        """
        return cls(
            logger=LoggerConfig(log_file=Path("logger.log"), refresh_interval="10s"),
            sampler=SamplerConfig(enabled=True, interval=DEFAULT_SAMPLE_INTERVAL),
            diagnostics=DiagnosticsConfig(),
        )
