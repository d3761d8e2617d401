"""Validity registry, decorator, and checks.

Usage:
    @validity(lambda handle: handle.fd >= 0)
    @dataclass
    class FileHandle:
        fd: int

    is_valid(FileHandle(-1))  # False
    is_valid(None)            # False
    is_valid(42)              # True (default policy)
"""

from __future__ import annotations

import ctypes
from collections.abc import Callable
from typing import Any

from scopedref.core.validity.models import (
    Validatable,
    ValidityPredicate,
    always_valid,
    has_value,
    non_null,
    not_none,
)


class ValidityRegistry:
    """Process-local registry mapping resource types to validity predicates.

    Lookup walks the resource type's MRO, so a policy registered for a base
    class covers its subclasses unless a subclass registers its own.
    """

    def __init__(self) -> None:
        """Initialize empty validity registry."""
        self._policies: dict[type, ValidityPredicate] = {}

    def register(self, cls: type, predicate: ValidityPredicate) -> None:
        """Register (or replace) the validity predicate for a type.

        Args:
            cls: Resource type the predicate applies to.
            predicate: Callable returning True when a resource is live.

        Raises:
            TypeError: If cls is not a type or predicate is not callable.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Expected a type, got {cls!r}")
        if not callable(predicate):
            raise TypeError(f"Validity predicate for {cls.__name__} must be callable")
        self._policies[cls] = predicate

    def unregister(self, cls: type) -> None:
        """Drop the policy registered for exactly this type, if any."""
        self._policies.pop(cls, None)

    def is_registered(self, cls: type) -> bool:
        """Check if a policy is registered for exactly this type.

        Args:
            cls: Type to check.

        Returns:
            True if cls itself has a policy, False otherwise.
        """
        return cls in self._policies

    def get_policy(self, cls: type) -> ValidityPredicate | None:
        """Find the most specific registered policy for a type.

        Args:
            cls: Resource type to look up.

        Returns:
            Predicate registered for the nearest class in the MRO, None if
            no class in the MRO has one.
        """
        for base in cls.__mro__:
            predicate = self._policies.get(base)
            if predicate is not None:
                return predicate
        return None

    def check(self, resource: Any) -> bool:
        """Decide whether a single resource is live.

        Tries in order:
        1. The resource's own ``__valid__`` if it is an instance implementing
           Validatable
        2. The most specific registered policy for its type
        3. The default policy (always valid)

        Args:
            resource: Resource to check.

        Returns:
            True if the resource is live, False if it is the null form.
        """
        # Classes defining __valid__ match the protocol but are resources themselves
        if not isinstance(resource, type) and isinstance(resource, Validatable):
            return bool(resource.__valid__())
        predicate = self.get_policy(type(resource)) or always_valid
        return bool(predicate(resource))

    def check_all(self, resources: tuple[Any, ...]) -> bool:
        """Check that every resource in a bundle is live."""
        return all(self.check(resource) for resource in resources)


def _install_builtin_policies(registry: ValidityRegistry) -> None:
    registry.register(type(None), not_none)
    for simple_pointer in (ctypes.c_void_p, ctypes.c_char_p, ctypes.c_wchar_p):
        registry.register(simple_pointer, has_value)
    # POINTER(T) instances and CFUNCTYPE instances
    registry.register(ctypes._Pointer, non_null)
    registry.register(ctypes._CFuncPtr, non_null)


# Module-level registry instance
_registry = ValidityRegistry()
_install_builtin_policies(_registry)


def get_registry() -> ValidityRegistry:
    """Access the global validity registry.

    Returns:
        The process-local ValidityRegistry instance.
    """
    return _registry


def is_valid(resource: Any) -> bool:
    """Check a resource against the global validity registry."""
    return _registry.check(resource)


def validity[C: type](predicate: ValidityPredicate) -> Callable[[C], C]:
    """Register a validity predicate for the decorated class.

    Args:
        predicate: Callable returning True when an instance is live.

    Returns:
        Class decorator that registers the predicate and returns the class
        unchanged.

    Note:
        Stack it above @dataclass like any other class decorator:

        >>> @validity(lambda h: h.fd >= 0)
        ... @dataclass
        ... class FileHandle:
        ...     fd: int
    """

    def decorator(cls: C) -> C:
        _registry.register(cls, predicate)
        return cls

    return decorator
