"""Guard models: access results, status codes, and errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class SetStatus(IntEnum):
    """Outcome of ScopedRef.try_set(); compares equal to the plain codes."""

    OK = 0  # Resource replaced
    RELEASED = 1  # Guard already released, nothing changed


@dataclass(frozen=True, slots=True)
class Present[T]:
    """A resource returned by ScopedRef.try_get() from a live guard.

    Wrapping keeps a stored ``None`` distinguishable from "already released".
    """

    value: T


class ScopedRefError(Exception):
    """Base class for errors raised by scoped references."""

    pass


class AlreadyReleasedError(ScopedRefError, RuntimeError):
    """Raised when a released guard is read, written, or stolen from."""

    pass


class ResourceIndexError(ScopedRefError, IndexError):
    """Raised when a resource position is outside the guard's declared arity."""

    pass
