"""Core type definitions for scopedref."""

from collections.abc import Callable

type Cleanup[*Ts] = Callable[[*Ts], object]
"""Type alias for a cleanup routine.

A cleanup routine receives every managed resource as a positional argument,
in the order the resources were declared. Its return value is ignored.
"""
