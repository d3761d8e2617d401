"""The owning guard: exactly-once cleanup for a fixed bundle of resources.

Usage:
    with ScopedRef(os.close, os.open(path, os.O_RDONLY)) as fd:
        data = os.read(fd.get(), 1024)
    # os.close(fd) has run, even if os.read raised

    buf = ScopedRef(free_pair, ptr, count)
    buf.set(7, index=1)
    ptr, count = buf.steal()  # caller owns them now, free_pair never runs
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, NoReturn

from scopedref.config import get_logger, get_settings
from scopedref.core.guard.models import (
    AlreadyReleasedError,
    Present,
    ResourceIndexError,
    SetStatus,
)
from scopedref.core.types import Cleanup
from scopedref.core.validity import get_registry

logger = get_logger(__name__)


def _describe(cleanup: Any) -> str:
    return getattr(cleanup, "__qualname__", None) or repr(cleanup)


def _subclass_slots(cls: type) -> list[str]:
    """Slot names declared by subclasses of ScopedRef, mangled as stored."""
    names: list[str] = []
    for klass in cls.__mro__:
        if klass is ScopedRef:
            break
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            names.append(name)
    return names


class ScopedRef[*Ts]:
    """Single owner of one or more resources and the routine that releases them.

    The cleanup routine is called with every resource, in declared order,
    exactly once: on ``with`` exit, on ``release()``, or when the guard is
    garbage collected, whichever comes first. ``move()``, ``move_from()`` and
    ``steal()`` hand ownership on without calling it. Guards cannot be
    copied or pickled.

    Not thread-safe: only the thread holding the guard may use it.

    Args:
        cleanup: Callable invoked as ``cleanup(*resources)`` on release.
        *resources: The resources to own, in the order cleanup expects them.
    """

    __slots__ = ("_resources", "_cleanup", "_released", "__weakref__")

    def __init__(self, cleanup: Cleanup[*Ts], *resources: *Ts) -> None:
        """Bind the cleanup routine and store the resources.

        Raises:
            TypeError: If cleanup is not callable.
            ValueError: If no resources are given.
        """
        if not callable(cleanup):
            raise TypeError(f"Cleanup routine must be callable, got {type(cleanup).__name__}")
        if not resources:
            raise ValueError("ScopedRef needs at least one resource")
        self._cleanup = cleanup
        self._resources: tuple[Any, ...] = resources
        self._released = False

    # Lifecycle

    def __enter__(self) -> ScopedRef[*Ts]:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.release()

    def __del__(self) -> None:
        # Slots may be unset if __init__ raised
        if getattr(self, "_released", True):
            return
        try:
            try:
                warn_unreleased = get_settings().warn_unreleased
            except Exception:
                logger.exception("Invalid scopedref settings; skipping unreleased warning")
                warn_unreleased = False
            if warn_unreleased:
                warnings.warn(
                    f"{self!r} was never released; releasing it in the finalizer",
                    ResourceWarning,
                    stacklevel=2,
                    source=self,
                )
            logger.debug("Finalizer releasing %r", self)
        finally:
            self.release()

    def release(self) -> None:
        """Run the cleanup routine now unless the guard is already released.

        Idempotent. Exceptions raised by the cleanup routine are logged and
        swallowed; the guard counts as released either way.
        """
        if self._released:
            return
        resources = self._resources
        # Mark first so a re-entrant release() from the routine is a no-op
        self._released = True
        self._resources = self._empty()
        try:
            self._cleanup(*resources)
        except Exception as exc:
            self._report_cleanup_failure(exc, len(resources))

    def _report_cleanup_failure(self, exc: Exception, count: int) -> None:
        try:
            settings = get_settings()
        except Exception:
            # Defaults apply when settings fail to load
            logger.exception("Invalid scopedref settings; reporting cleanup failure at ERROR")
            enabled, level = True, logging.ERROR
        else:
            enabled = settings.log_cleanup_failures
            level = settings.cleanup_failure_levelno()
        if enabled:
            logger.log(
                level,
                "Cleanup error - potential leak (cleanup=%s, resources=%d)",
                _describe(self._cleanup),
                count,
                exc_info=exc,
            )

    # Ownership transfer

    def move(self) -> ScopedRef[*Ts]:
        """Transfer ownership to a new guard.

        Returns:
            New guard of the same class holding this guard's resources,
            cleanup routine and released flag, plus any extra state a
            subclass keeps in its own slots or __dict__. This guard ends up
            released without running cleanup.
        """
        moved = type(self).__new__(type(self))
        for name in _subclass_slots(type(self)):
            if hasattr(self, name):
                setattr(moved, name, getattr(self, name))
        if hasattr(self, "__dict__"):
            moved.__dict__.update(self.__dict__)
        moved._take(self)
        return moved

    def move_from(self, other: ScopedRef[*Ts]) -> ScopedRef[*Ts]:
        """Take ownership of another guard's resources.

        Releases whatever this guard owns first, then adopts other's
        resources, cleanup routine and released flag. other ends up released
        without running cleanup. Moving a guard into itself does nothing.

        Args:
            other: Guard to take ownership from.

        Returns:
            This guard.

        Raises:
            TypeError: If other is not a ScopedRef.
        """
        if other is self:
            return self
        if not isinstance(other, ScopedRef):
            raise TypeError(f"Can only move from a ScopedRef, got {type(other).__name__}")
        self.release()
        self._take(other)
        return self

    def steal(self) -> tuple[*Ts]:
        """Hand the resources to the caller without running cleanup.

        Returns:
            Tuple of all resources in declared order.

        Raises:
            AlreadyReleasedError: If there is nothing left to steal.
        """
        if self._released:
            raise AlreadyReleasedError("Already released")
        resources = self._resources
        self._released = True
        self._resources = self._empty()
        return resources  # type: ignore[return-value]

    def _take(self, other: ScopedRef[*Ts]) -> None:
        self._resources = other._resources
        self._cleanup = other._cleanup
        self._released = other._released
        other._released = True
        other._resources = other._empty()

    def __copy__(self) -> NoReturn:
        raise TypeError(f"{type(self).__name__} cannot be copied; use move() to transfer it")

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise TypeError(f"{type(self).__name__} cannot be copied; use move() to transfer it")

    def __reduce_ex__(self, protocol: Any) -> NoReturn:
        raise TypeError(f"{type(self).__name__} cannot be pickled")

    # Access

    def get(self, index: int = 0) -> Any:
        """Return the resource at a position.

        Args:
            index: Resource position, 0 for the first resource.

        Raises:
            ResourceIndexError: If index is outside the declared resources.
            AlreadyReleasedError: If the guard is released.
        """
        self._check_index(index)
        if self._released:
            raise AlreadyReleasedError("Resource released")
        return self._resources[index]

    def try_get(self, index: int = 0) -> Present[Any] | None:
        """Return the resource at a position, or None if released.

        Raises:
            ResourceIndexError: If index is outside the declared resources.
        """
        self._check_index(index)
        if self._released:
            return None
        return Present(self._resources[index])

    def set(self, value: Any, index: int = 0) -> None:
        """Replace the resource at a position.

        The replaced value is not cleaned up; release it first if it needs it.

        Raises:
            ResourceIndexError: If index is outside the declared resources.
            AlreadyReleasedError: If the guard is released.
        """
        self._check_index(index)
        if self._released:
            raise AlreadyReleasedError("Resource released")
        self._replace(index, value)

    def try_set(self, value: Any, index: int = 0) -> SetStatus:
        """Replace the resource at a position unless the guard is released.

        Returns:
            SetStatus.OK (0) if replaced, SetStatus.RELEASED (1) otherwise.

        Raises:
            ResourceIndexError: If index is outside the declared resources.
        """
        self._check_index(index)
        if self._released:
            return SetStatus.RELEASED
        self._replace(index, value)
        return SetStatus.OK

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(value, index)

    def _replace(self, index: int, value: Any) -> None:
        resources = list(self._resources)
        resources[index] = value
        self._resources = tuple(resources)

    def _check_index(self, index: int) -> None:
        arity = len(self._resources)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < arity:
            raise ResourceIndexError(
                f"Invalid resource index {index!r} for {arity} resource(s)"
            )

    def _empty(self) -> tuple[Any, ...]:
        return (None,) * len(self._resources)

    # Introspection

    def __bool__(self) -> bool:
        """True if not released and every resource passes its validity policy."""
        return not self._released and get_registry().check_all(self._resources)

    @property
    def released(self) -> bool:
        """Whether the guard no longer owns its resources."""
        return self._released

    @property
    def arity(self) -> int:
        """Number of declared resources."""
        return len(self._resources)

    @property
    def cleanup_routine(self) -> Cleanup[*Ts]:
        """Callable invoked with the resources on release."""
        return self._cleanup

    def __repr__(self) -> str:
        name = type(self).__name__
        cleanup = _describe(self._cleanup)
        if self._released:
            return f"{name}(<released>, cleanup={cleanup})"
        resources = ", ".join(repr(r) for r in self._resources)
        return f"{name}({resources}, cleanup={cleanup})"
