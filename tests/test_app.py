import threading
from pathlib import Path

from refresh_logger import AppConfig, LoggerConfig, SamplerConfig
from refresh_logger.app import build_parser, load_config, run

from conftest import LINE_PATTERN, read_lines


def test_load_config_without_path_returns_defaults():
    assert load_config() == AppConfig.create_default()


def test_load_config_from_file(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text('[logger]\nlog_file = "custom.log"\n', encoding="utf-8")
    assert load_config(path).logger.log_file == Path("custom.log")


def test_parser_accepts_config_option():
    args = build_parser().parse_args(["--config", "app.toml"])
    assert args.config == Path("app.toml")
    assert build_parser().parse_args([]).config is None


def test_run_logs_startup_lines_and_stops(log_path):
    config = AppConfig(
        logger=LoggerConfig(log_file=log_path, refresh_interval="10s"),
        sampler=SamplerConfig(enabled=True, interval="3s"),
    )
    stop = threading.Event()
    stop.set()

    run(config, stop_event=stop)

    lines = read_lines(log_path)
    assert len(lines) == 2
    assert all(LINE_PATTERN.fullmatch(line) for line in lines)
    assert lines[0].endswith(" - Application started\n")
    assert lines[1].endswith(" - Application event occured\n")
    assert not any(t.name in ("memory-sampler", "log-refresh:logger.txt") for t in threading.enumerate())
