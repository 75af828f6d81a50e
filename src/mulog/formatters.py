"""
Record model and line formatter.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .exceptions import SamplingError
from .usage import PathLike, UsageSampler

# =============================================================================
# Severity
# =============================================================================


class Severity(Enum):
    """Severity of a record. The value is the word written to the log."""

    STATUS = "STATUS"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def label(self) -> str:
        return self.value

    @property
    def padding(self) -> str:
        """Spaces that right-align this label with the widest one."""
        return " " * (SEVERITY_WIDTH - len(self.value))


SEVERITY_WIDTH = max(len(s.value) for s in Severity)


@dataclass(frozen=True)
class LogRecord:
    """A single log entry before formatting.

    ``text`` already starts with the severity word and carries the section
    indentation.
    """

    timestamp: str
    severity: Severity
    text: str


# =============================================================================
# Record Formatter (Aligned Columns)
# =============================================================================


class RecordFormatter:
    """Renders records as ``timestamp [memory] [disk] padded-severity text``."""

    USAGE_WIDTH = 6
    BLANK_USAGE = " " * USAGE_WIDTH

    def __init__(self, sampler: UsageSampler, disk_path: PathLike | None = None):
        self._sampler = sampler
        self._disk_path = disk_path if disk_path is not None else tempfile.gettempdir()

    @property
    def disk_path(self) -> PathLike:
        return self._disk_path

    @classmethod
    def _render_usage(cls, extractor: Callable[[], float]) -> str:
        try:
            value = float(extractor())
        except (SamplingError, TypeError, ValueError):
            return cls.BLANK_USAGE + " "
        return f"{value:>{cls.USAGE_WIDTH}.1f} "

    def memory_field(self) -> str:
        return self._render_usage(self._sampler.memory_usage_gb)

    def disk_field(self) -> str:
        return self._render_usage(lambda: self._sampler.disk_usage_gb(self._disk_path))

    def format(self, record: LogRecord, *, memory: bool = False, disk: bool = False) -> str:
        """Format a record into a single line (without the trailing newline)."""
        return "".join(
            [
                record.timestamp,
                " ",
                self.memory_field() if memory else "",
                self.disk_field() if disk else "",
                record.severity.padding,
                record.text,
            ]
        )
