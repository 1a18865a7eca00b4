"""Result type for engine operations - explicit success/failure values.

Scheduling failures are expected outcomes (a cycle in user data, a move that
collides with a flight), so engine functions return ``Ok`` or ``Err`` instead
of raising. Callers branch on ``is_ok`` / ``is_err`` or ``isinstance``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeGuard, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result carrying an error payload."""

    error: E


Result = Ok[T] | Err[E]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def err(error: E) -> Err[E]:
    return Err(error)


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Check whether a result is successful."""
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Check whether a result is a failure."""
    return isinstance(result, Err)


def map_result(result: Result[T, E], fn: Callable[[T], U]) -> Result[U, E]:
    """Map a successful value through ``fn``; failures pass through unchanged."""
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Result[T, E], fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Chain another fallible step onto a successful result."""
    if isinstance(result, Ok):
        return fn(result.value)
    return result


def unwrap_or(result: Result[T, E], default: T) -> T:
    """Return the value of a successful result, or ``default``."""
    if isinstance(result, Ok):
        return result.value
    return default
