"""Validity functionality: per-type liveness policies, registry, and decorator."""

from scopedref.core.validity.core import (
    ValidityRegistry,
    get_registry,
    is_valid,
    validity,
)
from scopedref.core.validity.models import (
    Validatable,
    ValidityPredicate,
    always_valid,
    has_value,
    non_null,
    not_none,
)

__all__ = [
    # Models
    "Validatable",
    "ValidityPredicate",
    "always_valid",
    "not_none",
    "has_value",
    "non_null",
    # Core
    "ValidityRegistry",
    "get_registry",
    "is_valid",
    "validity",
]
