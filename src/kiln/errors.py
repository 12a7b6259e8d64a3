"""Exception types raised by kiln."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .exe import ResolutionAttempt


class KilnError(Exception):
    """Base class for recoverable kiln errors."""


class ExecutableResolutionError(KilnError):
    """Every strategy for locating the kiln executable failed."""

    def __init__(self, message: str, attempts: list[ResolutionAttempt]) -> None:
        super().__init__(message, list(attempts))
        self.message = message
        self.attempts = list(attempts)

    def __str__(self) -> str:
        lines = [self.message]
        lines.extend(f"  {attempt}" for attempt in self.attempts)
        return "\n".join(lines)


class LockAcquisitionError(KilnError):
    """An advisory lock handle could not be created."""


class ManifestNotFoundError(KilnError):
    """No manifest file was found in the directory or any of its parents."""


class InvariantViolation(AssertionError):
    """An internal consistency guarantee was broken by the caller."""
