"""Parsing of human-readable interval specs such as ``"10s"`` or ``"1d"``."""

import re
from typing import Final

from .errors import InvalidIntervalFormat

INTERVAL_PATTERN: Final = re.compile(r"(\d+)([smhd])", re.ASCII)

UNIT_MILLISECONDS: Final[dict[str, int]] = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}


def parse_interval(spec: str) -> int:
    """Convert an interval spec into milliseconds.

    Args:
        spec: Duration of the form ``<digits><unit>`` with unit one of s, m, h, d

    Returns:
        Interval length in milliseconds

    Raises:
        InvalidIntervalFormat: If the spec does not match the pattern exactly
    """
    if not isinstance(spec, str):
        raise InvalidIntervalFormat(spec)

    match = INTERVAL_PATTERN.fullmatch(spec)
    if match is None:
        raise InvalidIntervalFormat(spec)

    value, unit = match.groups()
    return int(value) * UNIT_MILLISECONDS[unit]


def interval_seconds(spec: str) -> float:
    """Convert an interval spec into seconds, as expected by timers."""
    return parse_interval(spec) / 1000
