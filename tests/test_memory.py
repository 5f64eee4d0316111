import time

import psutil
import pytest

from refresh_logger import MemorySampler, RefreshingLogger, SamplerConfig
from refresh_logger.memory import read_memory

from conftest import LINE_PATTERN, read_lines


class RecordingLogger:
    def __init__(self):
        self.messages = []

    def debug(self, message):
        self.messages.append(message)


def test_sample_formats_percentage_with_two_decimals():
    target = RecordingLogger()
    sampler = MemorySampler(target, reader=lambda: (1, 3))

    assert sampler.sample() == pytest.approx(33.3333, rel=1e-4)
    assert target.messages == ["Current memory usage: 33.33"]


def test_default_interval_is_three_seconds():
    sampler = MemorySampler(RecordingLogger())
    assert sampler.interval == 3.0
    assert not sampler.running


def test_read_memory_uses_psutil():
    free, total = read_memory()
    assert 0 < free <= total
    assert total == psutil.virtual_memory().total


def test_sample_writes_debug_line(log_path):
    logger = RefreshingLogger(log_file=log_path, autostart=False)
    MemorySampler(logger, reader=lambda: (512, 1024)).sample()

    lines = read_lines(log_path)
    assert len(lines) == 1
    assert LINE_PATTERN.fullmatch(lines[0])
    assert lines[0].startswith("[DEBUG] - ")
    assert lines[0].endswith(" - Current memory usage: 50.00\n")


def test_timer_sampling_failure_is_reported(diagnostic_events):
    def broken_reader():
        raise psutil.AccessDenied()

    sampler = MemorySampler(RecordingLogger(), reader=broken_reader)
    sampler._sample_from_timer()

    assert [entry["event"] for entry in diagnostic_events] == ["Memory sample failed"]


def test_sampler_runs_on_interval():
    target = RecordingLogger()
    with MemorySampler(target, SamplerConfig(interval="1s"), reader=lambda: (1, 4)) as sampler:
        assert sampler.running
        time.sleep(1.4)

    assert not sampler.running
    assert target.messages == ["Current memory usage: 25.00"]
