"""Background sampling of system memory into a logger's debug stream."""

from collections.abc import Callable
from typing import Protocol

import psutil

from .config import SamplerConfig
from .diagnostics import get_logger
from .interval import interval_seconds
from .timer import RepeatingTimer

diagnostics = get_logger(__name__)


class DebugLogger(Protocol):
    def debug(self, message: str) -> None: ...


def read_memory() -> tuple[int, int]:
    """Return ``(free, total)`` system memory in bytes.

    "Free" is the memory available to new processes without swapping, which
    includes reclaimable caches.
    """
    memory = psutil.virtual_memory()
    return memory.available, memory.total


class MemorySampler:
    """Periodically logs the share of free system memory as a debug line.

    Only the public ``debug`` method of the target logger is used.

    Attributes:
        logger:     Destination for the samples
        interval:   Seconds between two samples
    """

    def __init__(
            self,
            logger: DebugLogger,
            config: SamplerConfig | None = None,
            reader: Callable[[], tuple[int, int]] = read_memory
    ) -> None:
        config = config if config is not None else SamplerConfig()
        self.logger = logger
        self.interval = interval_seconds(config.interval)
        self._reader = reader
        self._timer = RepeatingTimer(self.interval, self._sample_from_timer, name="memory-sampler")

    @property
    def running(self) -> bool:
        return self._timer.running

    def sample(self) -> float:
        """Take one sample, log it and return the free memory percentage."""
        free, total = self._reader()
        percentage = free / total * 100
        self.logger.debug(f"Current memory usage: {percentage:.2f}")
        return percentage

    def start(self) -> None:
        self._timer.start()

    def stop(self, timeout: float | None = None) -> None:
        self._timer.stop(timeout)

    def _sample_from_timer(self) -> None:
        try:
            self.sample()
        except (OSError, psutil.Error):
            diagnostics.exception("Memory sample failed")

    def __enter__(self) -> "MemorySampler":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
