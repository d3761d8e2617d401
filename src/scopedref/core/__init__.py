"""Core functionalities: the owning guard and per-type validity policies.

Architecture Note:
    core/validity is a stateless policy lookup over a process-local registry.
    core/guard holds the only stateful object, ScopedRef, which consults the
    validity registry for its truth value and config/ for diagnostics.
"""

from scopedref.core.guard import (
    AlreadyReleasedError,
    Present,
    ResourceIndexError,
    ScopedRef,
    ScopedRefError,
    SetStatus,
    make_scoped_ref,
    scoped,
)
from scopedref.core.types import Cleanup
from scopedref.core.validity import (
    Validatable,
    ValidityRegistry,
    get_registry,
    is_valid,
    validity,
)

__all__ = [
    # Types
    "Cleanup",
    # Guard
    "ScopedRef",
    "make_scoped_ref",
    "scoped",
    "Present",
    "SetStatus",
    "ScopedRefError",
    "AlreadyReleasedError",
    "ResourceIndexError",
    # Validity
    "Validatable",
    "ValidityRegistry",
    "get_registry",
    "is_valid",
    "validity",
]
