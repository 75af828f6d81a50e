"""
Exception hierarchy for the section logger.

Two families:
- argument errors raised before any state change or output;
- logged errors raised after an ERROR record reached every sink.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class MulogError(Exception):
    """Root of all logger exceptions."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidArgument(MulogError, ValueError):
    """Malformed sink specification, message text or validation parameter."""

    def __init__(self, *, name: str, expected: str) -> None:
        super().__init__(
            f"invalid value for {name}; expected {expected}",
            code="INVALID_ARGUMENT",
            details={"name": name, "expected": expected},
        )


class AlreadyConfigured(MulogError):
    """The logger already writes to a file and another file sink was requested."""

    def __init__(self, *, current: str, requested: str) -> None:
        super().__init__(
            "logger is already initialized to file",
            code="ALREADY_CONFIGURED",
            details={"current": current, "requested": requested},
        )


class UserError(MulogError):
    """Raised by ``error()`` after the ERROR record was written.

    ``text`` is the message without severity word and indentation.
    """

    def __init__(self, text: str, *, code: str = "USER_ERROR") -> None:
        super().__init__(text, code=code, details={"text": text})
        self.text = text


class UninitializedSection(UserError):
    """``complete()`` was called while no section is open."""

    def __init__(self, text: str = "No section to complete") -> None:
        super().__init__(text, code="UNINITIALIZED_SECTION")


class SamplingError(MulogError):
    """Memory or disk usage could not be determined."""

    def __init__(self, message: str, *, resource: str) -> None:
        super().__init__(message, code="SAMPLING_ERROR", details={"resource": resource})
