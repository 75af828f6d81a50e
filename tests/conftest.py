import re
import typing as t

import pytest

import mulog
from mulog.config import LoggingSettings
from mulog.core import SectionLogger
from mulog.exceptions import SamplingError

TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} ")


class FakeSampler:
    """Deterministic usage sampler; a value of None makes sampling fail."""

    def __init__(self, memory: t.Optional[float] = 1.5, disk: t.Optional[float] = 3.0):
        self.memory = memory
        self.disk = disk
        self.disk_paths: list = []

    def memory_usage_gb(self) -> float:
        if self.memory is None:
            raise SamplingError("no memory figure", resource="memory")
        return self.memory

    def disk_usage_gb(self, path) -> float:
        self.disk_paths.append(path)
        if self.disk is None:
            raise SamplingError("no disk figure", resource="disk")
        return self.disk


def body(line: str) -> str:
    """Strip the timestamp and its separating space from a log line."""
    match = TIMESTAMP.match(line)
    assert match, f"line does not start with a timestamp: {line!r}"
    return line[match.end() :]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MULOG_INDENT", "MULOG_TIMESTAMP_FORMAT", "MULOG_REPORT_DISK", "MULOG_DISK_PATH", "MULOG_CONSOLE_STREAM"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_default_logger(monkeypatch):
    """Each test gets a fresh process-wide logger."""
    monkeypatch.setattr(mulog, "_logger", None)
    yield
    monkeypatch.setattr(mulog, "_logger", None)


@pytest.fixture
def sampler() -> FakeSampler:
    return FakeSampler()


@pytest.fixture
def settings(tmp_path) -> LoggingSettings:
    return LoggingSettings(disk_path=str(tmp_path))


@pytest.fixture
def section_logger(settings, sampler) -> SectionLogger:
    return SectionLogger(settings=settings, sampler=sampler)


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "logs" / "run.log"


@pytest.fixture
def file_logger(section_logger, log_file) -> SectionLogger:
    """Logger writing to a file only, with usage columns switched off."""
    section_logger.init(str(log_file))
    section_logger.report_memory = False
    return section_logger


@pytest.fixture
def read_lines(log_file) -> t.Callable[[], list]:
    def _read() -> list:
        return log_file.read_text(encoding="utf-8").splitlines()

    return _read


@pytest.fixture
def strip() -> t.Callable[[str], str]:
    return body


@pytest.fixture
def make_sampler() -> t.Type[FakeSampler]:
    return FakeSampler
