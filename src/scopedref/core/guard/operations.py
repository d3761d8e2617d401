"""Convenience constructors for ScopedRef.

Usage:
    guard = make_scoped_ref(lambda p, n: lib.free(p), lib.alloc(100), 100)

    @scoped(os.close)
    def open_fd(path: str, flags: int) -> int:
        return os.open(path, flags)

    with open_fd("data.bin", os.O_RDONLY) as fd:
        ...
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from scopedref.core.guard.core import ScopedRef
from scopedref.core.types import Cleanup


def make_scoped_ref[*Ts](cleanup: Cleanup[*Ts], *resources: *Ts) -> ScopedRef[*Ts]:
    """Create a ScopedRef, cleanup routine first, then resources in order.

    Args:
        cleanup: Callable invoked as ``cleanup(*resources)`` on release.
        *resources: Resources to own.

    Returns:
        A live guard owning the resources.
    """
    return ScopedRef(cleanup, *resources)


def scoped[**P](
    cleanup: Callable[..., object],
) -> Callable[[Callable[P, Any]], Callable[P, ScopedRef[Any]]]:
    """Wrap an acquisition function so it returns a guard over what it acquires.

    A plain tuple returned by the acquisition function is spread into one
    resource per item; any other value (named tuples included) becomes a
    single resource.

    Args:
        cleanup: Routine that releases what the acquisition function returns.

    Returns:
        Decorator for the acquisition function.
    """

    def decorator(acquire: Callable[P, Any]) -> Callable[P, ScopedRef[Any]]:
        @functools.wraps(acquire)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> ScopedRef[Any]:
            acquired = acquire(*args, **kwargs)
            if type(acquired) is tuple:
                return ScopedRef(cleanup, *acquired)
            return ScopedRef(cleanup, acquired)

        return wrapper

    return decorator
