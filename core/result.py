"""
Result pattern for explicit error handling.

Source adapters return either a Success holding the parsed records or a
Failure holding a SourceError, instead of raising across the task boundary.
Callers branch with isinstance.

Example:
    >>> def first_record(records: tuple[str, ...]) -> Result[str, str]:
    ...     if not records:
    ...         return failure("no records")
    ...     return success(records[0])
    ...
    >>> first_record(("bash",))
    Success(value='bash')
    >>> isinstance(first_record(()), Failure)
    True
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Success[T]:
    """
    Represents a successful result containing a value.

    Attributes:
        value: The success value.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """
    Represents a failed result containing an error.

    Attributes:
        error: The error value.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Create a Success result."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Create a Failure result."""
    return Failure(error)
