"""
Section Logger for long-running batch jobs.

Every record carries a timestamp, the memory (and optionally disk) footprint,
a right-aligned severity word and one indentation unit per open section:

    2024-05-02 14:03:11    1.2  STATUS STARTED Preprocessing
    2024-05-02 14:03:12    1.4    INFO     Loaded 12 samples
    2024-05-02 14:03:40    2.0  STATUS COMPLETED Preprocessing

Output goes to the console, one file, or both.

Usage:
    import mulog

    mulog.init([None, "analysis.log"], title="Analysis")
    mulog.info(["Reached step", 2])
    mulog.complete()
"""

from __future__ import annotations

from typing import Any

from .config import LoggingSettings
from .core import ErrorOutcome, MessageText, SectionLogger
from .exceptions import (
    AlreadyConfigured,
    InvalidArgument,
    MulogError,
    SamplingError,
    UninitializedSection,
    UserError,
)
from .formatters import LogRecord, RecordFormatter, Severity
from .interceptors import SectionLogHandler, intercept_stdlib_logging
from .sinks import BaseSink, ConsoleSink, FileSink
from .usage import PsutilUsageSampler, UsageSampler

# =============================================================================
# Global State
# =============================================================================

_logger: SectionLogger | None = None


def get_logger() -> SectionLogger:
    """Process-wide section logger used by the module-level functions."""
    global _logger
    if _logger is None:
        _logger = SectionLogger()
    return _logger


def init(sinks: Any = None, title: MessageText | None = None) -> None:
    get_logger().init(sinks, title)


def close() -> None:
    get_logger().close()


def add_sink(spec: Any) -> None:
    get_logger().add_sink(spec)


def is_initialized() -> bool:
    return get_logger().is_initialized()


def list_sinks() -> tuple[BaseSink, ...]:
    return get_logger().list_sinks()


def get_files() -> list[str | None] | None:
    return get_logger().get_files()


def start(title: MessageText) -> None:
    get_logger().start(title)


def complete(outcome: ErrorOutcome = ErrorOutcome.RECOVERABLE) -> None:
    get_logger().complete(outcome)


def status(txt: MessageText) -> None:
    get_logger().status(txt)


def info(txt: MessageText) -> None:
    get_logger().info(txt)


def warning(txt: MessageText) -> None:
    get_logger().warning(txt)


def error(txt: MessageText, outcome: ErrorOutcome = ErrorOutcome.RECOVERABLE) -> None:
    get_logger().error(txt, outcome)


def validate_file(file: Any, is_file: bool | None = True, strict: bool = True) -> bool:
    return get_logger().validate_file(file, is_file, strict)


__all__ = [
    "AlreadyConfigured",
    "BaseSink",
    "ConsoleSink",
    "ErrorOutcome",
    "FileSink",
    "InvalidArgument",
    "LogRecord",
    "LoggingSettings",
    "MulogError",
    "PsutilUsageSampler",
    "RecordFormatter",
    "SamplingError",
    "SectionLogHandler",
    "SectionLogger",
    "Severity",
    "UninitializedSection",
    "UsageSampler",
    "UserError",
    "add_sink",
    "close",
    "complete",
    "error",
    "get_files",
    "get_logger",
    "info",
    "init",
    "intercept_stdlib_logging",
    "is_initialized",
    "list_sinks",
    "start",
    "status",
    "validate_file",
    "warning",
]
