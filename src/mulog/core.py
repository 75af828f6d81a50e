"""
Section logger state machine.

A ``SectionLogger`` owns its sinks, the stack of open section titles and the
usage display flags. Every record goes through a structlog processor chain that
stamps it, renders it into one line and fans the line out to all sinks.
"""

from __future__ import annotations

import os
import sys
import threading
from enum import Enum
from typing import Any, Iterable, Sequence

import structlog
from structlog.typing import EventDict, WrappedLogger

from .config import LoggingSettings
from .exceptions import AlreadyConfigured, InvalidArgument, UninitializedSection, UserError
from .formatters import LogRecord, RecordFormatter, Severity
from .sinks import BaseSink, FileSink, parse_sink, parse_sinks
from .usage import PsutilUsageSampler, UsageSampler

# =============================================================================
# Types
# =============================================================================


class ErrorOutcome(Enum):
    """What happens after an ERROR record has been written."""

    RECOVERABLE = "recoverable"  # raise a catchable UserError
    FATAL = "fatal"  # blank line to every sink, exit status 1


FATAL_EXIT_STATUS = 1

MessageText = str | Sequence[Any]


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


def to_text(txt: MessageText) -> str:
    """Join message parts with single spaces."""
    if isinstance(txt, str):
        return txt
    if isinstance(txt, (list, tuple)):
        return " ".join(str(part) for part in txt)
    raise InvalidArgument(name="txt", expected="a string or a list of message parts")


# =============================================================================
# Section Logger
# =============================================================================


class SectionLogger:
    """Logger with nested sections, usage columns and console/file output.

    Args:
        settings: Display and console configuration (default: read from env).
        sampler: Memory/disk usage source (default: psutil).
    """

    def __init__(self, settings: LoggingSettings | None = None, sampler: UsageSampler | None = None):
        self._settings = settings or LoggingSettings()
        self._formatter = RecordFormatter(sampler or PsutilUsageSampler(), self._settings.disk_path)
        self._lock = threading.RLock()
        self._sinks: list[BaseSink] = []
        self._titles: list[str] = []
        self._report_memory = False
        self._report_disk = False
        self._pipeline = structlog.wrap_logger(
            structlog.PrintLogger(file=_NOP_FILE),
            processors=[
                structlog.processors.TimeStamper(fmt=self._settings.timestamp_format, utc=False),
                self._render_record,
                self._multi_sink_renderer,
            ],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=False,
        )

    # -------------------------------------------------------------------------
    # Processors
    # -------------------------------------------------------------------------

    def _render_record(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        severity: Severity = event_dict["severity"]
        indent = self._settings.indent * len(self._titles)
        record = LogRecord(
            timestamp=event_dict["timestamp"],
            severity=severity,
            text=f"{severity.label} {indent}{event_dict['event']}",
        )
        return self._formatter.format(record, memory=self._report_memory, disk=self._report_disk)

    def _multi_sink_renderer(self, logger: WrappedLogger, method_name: str, line: str) -> str:
        """Write the rendered line to every sink. Returns empty to suppress default output."""
        self._fan_out(line + "\n")
        return ""

    def _fan_out(self, text: str) -> None:
        failure: Exception | None = None
        for sink in self._sinks:
            try:
                sink.emit(text)
            except Exception as exc:
                failure = failure or exc
        if failure is not None:
            raise failure

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _ensure_ready(self) -> None:
        if not self._sinks:
            self.init(None)

    def init(self, sinks: Any = None, title: MessageText | None = None) -> None:
        """(Re)initialize the logger.

        Args:
            sinks: ``None`` for the console, a file name, or a pair of one file
                name and ``None`` for both. Relative names are made absolute.
            title: If given and non-empty, a section with this title is started.
        """
        parsed = parse_sinks(sinks, stream=self._settings.console_stream)
        text = to_text(title) if title is not None else ""
        with self._lock:
            if self._sinks:
                self.close()
            self._sinks = list(parsed)
            self._titles = []
            self._report_memory = True
            self._report_disk = self._settings.report_disk
            if text:
                self.start(text)

    def close(self) -> None:
        """Deinitialize; open sections and sinks are forgotten."""
        with self._lock:
            self._sinks = []
            self._titles = []
            self._report_memory = False
            self._report_disk = False

    def add_sink(self, spec: Any) -> None:
        """Add the console (``None``) or a file to the current sinks.

        Raises:
            AlreadyConfigured: if a different file sink is already in use.
        """
        sink = parse_sink(spec, stream=self._settings.console_stream)
        with self._lock:
            self._ensure_ready()
            if sink in self._sinks:
                return
            if isinstance(sink, FileSink):
                current = next((s for s in self._sinks if isinstance(s, FileSink)), None)
                if current is not None:
                    raise AlreadyConfigured(current=current.file, requested=sink.file)
            self._sinks.append(sink)

    def is_initialized(self) -> bool:
        return bool(self._sinks)

    def list_sinks(self) -> tuple[BaseSink, ...]:
        return tuple(self._sinks)

    def get_files(self) -> list[str | None] | None:
        """Sink names, with ``None`` standing for the console; ``None`` if uninitialized."""
        if not self._sinks:
            return None
        return [sink.path for sink in self._sinks]

    @property
    def titles(self) -> tuple[str, ...]:
        return tuple(self._titles)

    @property
    def report_memory(self) -> bool:
        return self._report_memory

    @report_memory.setter
    def report_memory(self, value: bool) -> None:
        with self._lock:
            self._ensure_ready()
            self._report_memory = bool(value)

    @property
    def report_disk(self) -> bool:
        return self._report_disk

    @report_disk.setter
    def report_disk(self, value: bool) -> None:
        with self._lock:
            self._ensure_ready()
            self._report_disk = bool(value)

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def start(self, title: MessageText) -> None:
        """Start a section; the STARTED line uses the enclosing indentation."""
        text = to_text(title)
        with self._lock:
            self._ensure_ready()
            self._emit(Severity.STATUS, f"STARTED {text}")
            self._titles.append(text)

    def complete(self, outcome: ErrorOutcome = ErrorOutcome.RECOVERABLE) -> None:
        """Complete the innermost section.

        Closing the outermost section leaves a blank line after the record.

        Raises:
            UninitializedSection: if no section is open (after logging it).
        """
        with self._lock:
            self._ensure_ready()
            if not self._titles:
                self._fail("No section to complete", outcome, UninitializedSection)
            title = self._titles.pop()
            suffix = "\n" if not self._titles else ""
            self._emit(Severity.STATUS, f"COMPLETED {title}{suffix}")

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def _emit(self, severity: Severity, text: str) -> None:
        self._pipeline.msg(text, severity=severity)

    def log(self, severity: Severity, txt: MessageText) -> None:
        """Write one record; never raises for ERROR records."""
        text = to_text(txt)
        with self._lock:
            self._ensure_ready()
            self._emit(Severity(severity), text)

    def status(self, txt: MessageText) -> None:
        self.log(Severity.STATUS, txt)

    def info(self, txt: MessageText) -> None:
        self.log(Severity.INFO, txt)

    def warning(self, txt: MessageText) -> None:
        self.log(Severity.WARNING, txt)

    def error(self, txt: MessageText, outcome: ErrorOutcome = ErrorOutcome.RECOVERABLE) -> None:
        """Write an ERROR record, then raise ``UserError`` or halt the process.

        With ``ErrorOutcome.FATAL`` a blank line is appended to every sink and
        the process exits with status 1 without unwinding.
        """
        self._fail(to_text(txt), outcome, UserError)

    def _fail(self, text: str, outcome: ErrorOutcome, exc_type: type[UserError]) -> None:
        fatal = ErrorOutcome(outcome) is ErrorOutcome.FATAL
        with self._lock:
            self._ensure_ready()
            if not fatal:
                self._emit(Severity.ERROR, text)
            else:
                # a failing sink must not cancel the halt
                try:
                    self._emit(Severity.ERROR, text)
                finally:
                    self._terminate()
        raise exc_type(text)

    def _terminate(self) -> None:
        try:
            self._fan_out("\n")
        finally:
            for stream in (sys.stdout, sys.stderr):
                try:
                    stream.flush()
                except (OSError, ValueError):
                    pass
            os._exit(FATAL_EXIT_STATUS)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_file(self, file: Any, is_file: bool | None = True, strict: bool = True) -> bool:
        """Check that a file or directory exists and has the expected type.

        Args:
            file: Name of the file or directory.
            is_file: ``True`` for a file, ``False`` for a directory, ``None`` for either.
            strict: Log failures as ERROR (raising ``UserError``) instead of WARNING.

        Returns:
            Whether the validation succeeded.
        """
        if not isinstance(file, (str, os.PathLike)):
            raise InvalidArgument(name="file", expected="single character")
        if is_file is not None and not isinstance(is_file, bool):
            raise InvalidArgument(name="is_file", expected="True, False or None")
        if not isinstance(strict, bool):
            raise InvalidArgument(name="strict", expected="True or False")

        name = os.fspath(file)
        if not os.path.exists(name):
            kind = "File / directory" if is_file is None else ("File" if is_file else "Directory")
            return self._validation_failed([kind, "not found:", name], strict)
        if is_file is not None:
            is_dir = os.path.isdir(name)
            if is_file == is_dir:
                return self._validation_failed([name, "is a", "directory" if is_dir else "file"], strict)
        return True

    def _validation_failed(self, parts: Iterable[str], strict: bool) -> bool:
        msg = list(parts)
        if strict:
            self.error(msg)
        self.warning(msg)
        return False
