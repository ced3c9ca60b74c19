"""
infinits - Lazy, possibly infinite, clonable sequences

Submodules:
- types: MISSING sentinel, RangeOptions, error classes
- producers: Generator functions that produce the elements
- history: Build steps, replay and recipe descriptions
- core: The Infinits class

Quick tour:

    >>> from infinits import Infinits
    >>> evens = Infinits.range().map(lambda n: n * 2)
    >>> evens.take(5).to_list()
    [0, 2, 4, 6, 8]
    >>> odds = evens.clone().map(lambda n: n + 1)
    >>> Infinits.zip_short(evens, odds).take(2).to_list()
    [(0, 1), (2, 3)]
"""

from infinits.core import Infinits, zip_long, zip_short
from infinits.history import BuildStep, describe, replay
from infinits.types import (
    INFINITY,
    MISSING,
    InfinitsError,
    RangeOptions,
    ReplayError,
)

__version__ = "0.1.0"

__all__ = [
    "Infinits",
    "zip_long",
    "zip_short",
    "BuildStep",
    "describe",
    "replay",
    "INFINITY",
    "MISSING",
    "InfinitsError",
    "RangeOptions",
    "ReplayError",
]
