"""
infinits.types - Core type definitions for Infinits

This module contains the small shared types used by the producers, the
history subsystem and the sequence engine:
- MISSING: Sentinel returned for absent values (nth past the end, failed find,
  exhausted zip_long operands)
- RangeOptions: Resolved configuration of a range generator
- InfinitsError / ReplayError: The error hierarchy
- Callable aliases used in signatures
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional


class _Missing:
    """Singleton type of the MISSING sentinel."""

    __slots__ = ()

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Missing, ())


# Sentinel for missing values
MISSING = _Missing()
_MISSING = MISSING

INFINITY = math.inf


class InfinitsError(Exception):
    """Base class for errors raised by infinits."""

    pass


class ReplayError(InfinitsError):
    """Raised when a history cannot be replayed.

    This signals a broken internal invariant (an unknown or misplaced build
    step), not an ordinary "no result" outcome. Callers are not expected to
    recover from it.
    """

    pass


@dataclass(frozen=True)
class RangeOptions:
    """
    Configuration of a range generator.

    Attributes:
        start: First value produced
        end: Exclusive bound, or None for an unbounded range
        step: Increment added after each value
    """

    start: Any = 0
    end: Any = None
    step: Any = 1

    @property
    def resolved_end(self):
        """The bound actually compared against.

        An omitted end is +inf for a positive step and -inf otherwise.
        """
        if self.end is not None:
            return self.end
        return INFINITY if self.step > 0 else -INFINITY

    @property
    def is_constant(self) -> bool:
        return self.step == 0


# Callback signatures
TabulateFn = Callable[[int], Any]
Predicate = Callable[[Any], bool]
MapFn = Callable[..., Any]
ReduceFn = Callable[..., Any]
ScanFn = Callable[[Any, Any], Any]
VisitFn = Callable[..., None]


# Type exports
__all__ = [
    "MISSING",
    "INFINITY",
    "InfinitsError",
    "ReplayError",
    "RangeOptions",
    "TabulateFn",
    "Predicate",
    "MapFn",
    "ReduceFn",
    "ScanFn",
    "VisitFn",
]
