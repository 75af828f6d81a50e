"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from .exceptions import InvalidArgument

ConsoleStream = Literal["stdout", "stderr"]

SINK_SPEC_EXPECTED = "None (console), a file name, or one file name together with None"


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, text: str) -> None:
        """Append already formatted text to the sink."""
        ...

    @property
    @abstractmethod
    def path(self) -> str | None:
        """Absolute file name, or None for the console."""
        ...


@dataclass(frozen=True)
class ConsoleSink(BaseSink):
    """Standard output sink.

    The stream is looked up on every write so that redirections of
    ``sys.stdout``/``sys.stderr`` made after initialization are honored.
    """

    stream: ConsoleStream = field(default="stdout", compare=False)

    def emit(self, text: str) -> None:
        out = sys.stderr if self.stream == "stderr" else sys.stdout
        out.write(text)
        out.flush()

    @property
    def path(self) -> None:
        return None


@dataclass(frozen=True)
class FileSink(BaseSink):
    """Append-only file sink; the file is opened and closed on every write."""

    file: str

    def emit(self, text: str) -> None:
        target = Path(self.file)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "a", encoding="utf-8") as handle:
            handle.write(text)

    @property
    def path(self) -> str:
        return self.file


# =============================================================================
# Sink Specification Parsing
# =============================================================================


def normalize_path(value: str | os.PathLike) -> str:
    """Absolute form of ``value``; the path does not need to exist."""
    return os.path.abspath(os.path.expanduser(os.fspath(value)))


def _is_path(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike)) and os.fspath(value) != ""


def _single(value: Any, stream: ConsoleStream) -> BaseSink:
    if value is None:
        return ConsoleSink(stream=stream)
    if _is_path(value):
        return FileSink(normalize_path(value))
    raise InvalidArgument(name="fname", expected=SINK_SPEC_EXPECTED)


def parse_sink(spec: Any, *, stream: ConsoleStream = "stdout") -> BaseSink:
    """Parse a single-sink specification (console marker or one path)."""
    if isinstance(spec, (list, tuple)):
        if len(spec) != 1:
            raise InvalidArgument(name="fname", expected="a single file name or None")
        spec = spec[0]
    return _single(spec, stream)


def parse_sinks(spec: Any, *, stream: ConsoleStream = "stdout") -> tuple[BaseSink, ...]:
    """Parse an initialization sink specification.

    Accepted shapes: ``None``, a non-empty path, or a list/tuple holding either
    one of those or exactly one ``None`` and one non-empty path (in any order).
    """
    if not isinstance(spec, (list, tuple)):
        return (_single(spec, stream),)
    if len(spec) == 1:
        return (_single(spec[0], stream),)
    if len(spec) == 2:
        consoles = [item for item in spec if item is None]
        paths = [item for item in spec if _is_path(item)]
        if len(consoles) == 1 and len(paths) == 1:
            return tuple(_single(item, stream) for item in spec)
    raise InvalidArgument(name="fname", expected=SINK_SPEC_EXPECTED)
