"""Process bootstrap: wires the logger, the memory sampler and diagnostics."""

import argparse
import threading
from collections.abc import Sequence
from pathlib import Path

from .config import AppConfig
from .diagnostics import configure_diagnostics, get_logger
from .logger import RefreshingLogger
from .memory import MemorySampler

diagnostics = get_logger(__name__)


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load the TOML configuration, or the stock composition when no path is given."""
    if config_path is None:
        return AppConfig.create_default()
    return AppConfig.from_toml(Path(config_path))


def run(config: AppConfig, stop_event: threading.Event | None = None) -> None:
    """Run the logger and sampler until ``stop_event`` is set or Ctrl+C.

    Both timers are stopped before returning.

    Args:
        config:     Application configuration
        stop_event: Optional event that ends the run when set
    """
    stop_event = stop_event if stop_event is not None else threading.Event()

    with RefreshingLogger(config.logger) as logger:
        sampler = MemorySampler(logger, config.sampler)
        if config.sampler.enabled:
            sampler.start()

        try:
            logger.log("Application started")
            logger.log("Application event occured")
            diagnostics.info(
                "Logging started",
                log_file=str(logger.log_file),
                refresh_interval=config.logger.refresh_interval,
            )
            # Short waits keep the main thread responsive to KeyboardInterrupt
            while not stop_event.wait(0.5):
                pass
        except KeyboardInterrupt:
            diagnostics.info("Interrupted, shutting down")
        finally:
            sampler.stop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refresh-logger",
        description="Append leveled log lines to a file that is truncated on a timer.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="TOML configuration file (defaults to logger.log refreshed every 10s)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Console entry point."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    configure_diagnostics(config.diagnostics)
    run(config)
