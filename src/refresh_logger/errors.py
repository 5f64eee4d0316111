"""Exception types raised by the refreshing logger."""


class RefreshLoggerError(Exception):
    """Base class for all errors raised by this package."""


class InvalidIntervalFormat(RefreshLoggerError, ValueError):
    """Raised when a duration string does not match ``<digits><unit>``."""

    def __init__(self, spec: object) -> None:
        self.spec = spec
        super().__init__(
            f"Invalid interval format: {spec!r}. Use a format like '1d', '2h', etc."
        )


class InvalidLogLevel(RefreshLoggerError, ValueError):
    """Raised when a log call names a level outside the fixed set."""

    def __init__(self, level: object, valid: tuple[str, ...]) -> None:
        self.level = level
        self.valid = valid
        super().__init__(f"Invalid log level: {level}. Choose one of {', '.join(valid)}.")


class ConfigError(RefreshLoggerError, ValueError):
    """Raised when a configuration file cannot be loaded or holds bad values."""
