"""Guard functionality: the owning guard, its models, and constructors."""

from scopedref.core.guard.core import ScopedRef
from scopedref.core.guard.models import (
    AlreadyReleasedError,
    Present,
    ResourceIndexError,
    ScopedRefError,
    SetStatus,
)
from scopedref.core.guard.operations import make_scoped_ref, scoped

__all__ = [
    # Models
    "Present",
    "SetStatus",
    "ScopedRefError",
    "AlreadyReleasedError",
    "ResourceIndexError",
    # Core
    "ScopedRef",
    # Operations
    "make_scoped_ref",
    "scoped",
]
