"""Validity models: the protocol resources can implement to judge themselves."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

type ValidityPredicate = Callable[[Any], bool]
"""Predicate deciding whether a resource is live (not the null/sentinel form)."""


@runtime_checkable
class Validatable(Protocol):
    """Resource that knows whether it is in its null/sentinel form."""

    def __valid__(self) -> bool: ...


def always_valid(resource: Any) -> bool:
    """Default policy: any value is a live resource."""
    return True


def not_none(resource: Any) -> bool:
    """Policy for ``None``, the null form of every optional resource."""
    return resource is not None


def has_value(resource: Any) -> bool:
    """Policy for ctypes simple pointers (``c_void_p``, ``c_char_p``, ...).

    A null simple pointer reports ``value`` as ``None``.
    """
    return resource.value is not None


def non_null(resource: Any) -> bool:
    """Policy for ctypes pointer instances and function pointers.

    ctypes makes null pointers falsy.
    """
    return bool(resource)
