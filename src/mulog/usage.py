"""
Resource usage sampling for the record formatter.
"""

from __future__ import annotations

import os
from typing import Protocol, Union

import psutil

from .exceptions import SamplingError

_GB = 1024**3

PathLike = Union[str, os.PathLike]


class UsageSampler(Protocol):
    """Source of the memory and disk figures shown on every record."""

    def memory_usage_gb(self) -> float: ...

    def disk_usage_gb(self, path: PathLike) -> float: ...


class PsutilUsageSampler:
    """Samples the current process with psutil and walks directories for disk usage."""

    def __init__(self, pid: int | None = None):
        self._pid = pid if pid is not None else os.getpid()
        self._process: psutil.Process | None = None

    def memory_usage_gb(self) -> float:
        """Virtual memory size of the process, in gigabytes."""
        try:
            if self._process is None:
                self._process = psutil.Process(self._pid)
            return self._process.memory_info().vms / _GB
        except psutil.Error as exc:
            raise SamplingError(f"cannot read memory usage: {exc}", resource="memory") from exc

    def disk_usage_gb(self, path: PathLike) -> float:
        """Combined size of all files below ``path``, in gigabytes.

        Directory entries themselves are not counted.
        """
        if not os.path.isdir(path):
            raise SamplingError(
                f"invalid value for path; expected existing directory: {path}",
                resource="disk",
            )
        total = 0
        try:
            for root, _dirs, files in os.walk(path):
                for name in files:
                    full = os.path.join(root, name)
                    if not os.path.islink(full):
                        total += os.path.getsize(full)
        except OSError as exc:
            raise SamplingError(f"cannot read disk usage: {exc}", resource="disk") from exc
        return total / _GB
