"""
Interceptors for capturing standard library logs.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .core import SectionLogger
from .formatters import Severity


def severity_for(levelno: int) -> Severity:
    """Map a stdlib level onto the closest record severity."""
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    return Severity.INFO


class SectionLogHandler(logging.Handler):
    """
    Redirect standard library logging events to a section logger.

    ERROR and CRITICAL records are written as ERROR lines but never raise;
    the library that logged them keeps control of its own error handling.
    """

    def __init__(self, target: SectionLogger | Callable[[], SectionLogger] | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._target = target

    def _resolve(self) -> SectionLogger:
        if isinstance(self._target, SectionLogger):
            return self._target
        if self._target is not None:
            return self._target()
        from . import get_logger

        return get_logger()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self._resolve().log(severity_for(record.levelno), msg)
        except Exception:
            self.handleError(record)


def intercept_stdlib_logging(
    target: SectionLogger | None = None,
    *,
    level: int = logging.INFO,
    names: Iterable[str] = (),
) -> SectionLogHandler:
    """Route the root logger (and the named loggers) into a section logger.

    All existing root handlers are removed. Named loggers lose their handlers
    and propagate to the root.
    """
    handler = SectionLogHandler(target)
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in names:
        lg = logging.getLogger(name)
        lg.handlers = []
        lg.propagate = True

    return handler
