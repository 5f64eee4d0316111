"""Log level definitions and validation constants."""

from typing import Final, Literal, get_args

LogLevel = Literal["DEBUG", "INFO", "WARN", "ERROR"]
VALID_LOG_LEVELS: Final[tuple[LogLevel, ...]] = get_args(LogLevel)

DEBUG: Final[LogLevel] = "DEBUG"
INFO: Final[LogLevel] = "INFO"
WARN: Final[LogLevel] = "WARN"
ERROR: Final[LogLevel] = "ERROR"
