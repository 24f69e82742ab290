"""Error types for package sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for source errors."""

    UNKNOWN = "unknown"
    INVOCATION = "invocation"
    TIMEOUT = "timeout"


@dataclass(frozen=True, slots=True)
class SourceError:
    """
    Error produced by a package source.

    Attributes:
        code: Error code identifying the type of error.
        message: Human-readable error message.
        source: Name of the source that produced the error.
        details: Additional error details (optional).
    """

    code: ErrorCode
    message: str
    source: str
    details: str | None = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        text = f"[{self.source}] {self.code.value}: {self.message}"
        if self.details:
            return f"{text} ({self.details})"
        return text


def InvocationError(
    source: str,
    command: str,
    details: str | None = None,
) -> SourceError:
    """Create an error for a command that could not be spawned."""
    return SourceError(
        code=ErrorCode.INVOCATION,
        message=f"Failed to run {command}",
        source=source,
        details=details,
    )


def SearchTimeoutError(
    source: str,
    timeout: float,
) -> SourceError:
    """Create an error for a source that did not answer in time."""
    return SourceError(
        code=ErrorCode.TIMEOUT,
        message="Search timed out",
        source=source,
        details=f"no result after {timeout:g}s",
    )


def TaskCrashedError(
    source: str,
    details: str | None = None,
) -> SourceError:
    """Create an error for a search task that raised instead of returning."""
    return SourceError(
        code=ErrorCode.UNKNOWN,
        message="Search task failed",
        source=source,
        details=details,
    )
