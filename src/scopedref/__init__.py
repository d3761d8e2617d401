"""scopedref: exactly-once cleanup for externally owned resources.

Usage:
    import os
    from scopedref import ScopedRef, make_scoped_ref

    with ScopedRef(os.close, os.open("data.bin", os.O_RDONLY)) as fd:
        header = os.read(fd.get(), 16)

    # Several resources, one cleanup routine
    pair = make_scoped_ref(lambda ptr, size: lib.free(ptr), lib.alloc(64), 64)
    if pair:  # not released and ptr is not null
        lib.fill(pair.get(0), pair.get(1))
    pair.release()
"""

__version__ = "0.1.0"

# Core primitives
from scopedref.core import (
    AlreadyReleasedError,
    Cleanup,
    Present,
    ResourceIndexError,
    ScopedRef,
    ScopedRefError,
    SetStatus,
    Validatable,
    ValidityRegistry,
    get_registry,
    is_valid,
    make_scoped_ref,
    scoped,
    validity,
)

# Configuration
from scopedref.config import (
    GuardSettings,
    configure_logging,
    get_settings,
)

__all__ = [
    # Version
    "__version__",
    # Guard
    "ScopedRef",
    "make_scoped_ref",
    "scoped",
    "Cleanup",
    "Present",
    "SetStatus",
    # Errors
    "ScopedRefError",
    "AlreadyReleasedError",
    "ResourceIndexError",
    # Validity
    "Validatable",
    "ValidityRegistry",
    "get_registry",
    "is_valid",
    "validity",
    # Config
    "GuardSettings",
    "get_settings",
    "configure_logging",
]
