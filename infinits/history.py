"""
infinits.history - Construction history and replay

Every Infinits records how it was built as a tuple of build steps. The first
step is an *origin* (a static generator or a zip combinator); every later step
is a *derived* step naming one transformation and the arguments it was called
with. Replaying the tuple from the origin rebuilds an equivalent sequence with
brand new cursors, which is how clone() works.

Rules the replay follows:
- Sequence-valued arguments (append's other operand, zip operands) are cloned
  recursively before being passed on, never reused.
- inspect() never records a step, so its side effects are not replayed.
- Anything that is not a known step in a valid position raises ReplayError.

The step set is closed: each class below holds exactly the arguments its
operator needs.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, ClassVar

from infinits.types import MISSING, RangeOptions, ReplayError

logger = logging.getLogger(__name__)


# =============================================================================
# Build Steps
# =============================================================================


@dataclass(frozen=True)
class BuildStep:
    """Base class of all recorded construction steps."""

    name: ClassVar[str] = ""
    origin: ClassVar[bool] = False

    def arguments(self) -> list[tuple[str, Any]]:
        """Return (keyword, value) pairs used when describing the step.

        An empty keyword renders the value positionally.
        """
        return [("", getattr(self, f.name)) for f in fields(self)]


# Origin steps


@dataclass(frozen=True)
class RangeStep(BuildStep):
    name: ClassVar[str] = "range"
    origin: ClassVar[bool] = True

    options: RangeOptions

    def arguments(self):
        result = [("start", self.options.start)]
        if self.options.end is not None:
            result.append(("end", self.options.end))
        result.append(("step", self.options.step))
        return result


@dataclass(frozen=True)
class TabulateStep(BuildStep):
    name: ClassVar[str] = "tabulate"
    origin: ClassVar[bool] = True

    f: Any
    count: Any


@dataclass(frozen=True)
class RepeatStep(BuildStep):
    name: ClassVar[str] = "repeat"
    origin: ClassVar[bool] = True

    value: Any
    count: Any


@dataclass(frozen=True)
class FromStep(BuildStep):
    name: ClassVar[str] = "from_iterable"
    origin: ClassVar[bool] = True

    collection: Any


@dataclass(frozen=True)
class IterateStep(BuildStep):
    name: ClassVar[str] = "iterate"
    origin: ClassVar[bool] = True

    f: Any
    seed: Any


@dataclass(frozen=True)
class ZipStep(BuildStep):
    """A zip_long or zip_short over its operand sequences."""

    origin: ClassVar[bool] = True

    sequences: tuple
    longest: bool
    fillvalue: Any = MISSING

    @property
    def name(self):
        return "zip_long" if self.longest else "zip_short"

    def arguments(self):
        result: list[tuple[str, Any]] = [("", seq) for seq in self.sequences]
        if self.longest and self.fillvalue is not MISSING:
            result.append(("fillvalue", self.fillvalue))
        return result


# Derived steps


@dataclass(frozen=True)
class MapStep(BuildStep):
    name: ClassVar[str] = "map"

    f: Any
    with_index: bool = False

    def arguments(self):
        if self.with_index:
            return [("", self.f), ("with_index", True)]
        return [("", self.f)]


@dataclass(frozen=True)
class FilterStep(BuildStep):
    name: ClassVar[str] = "filter"

    pred: Any


@dataclass(frozen=True)
class UntilStep(BuildStep):
    name: ClassVar[str] = "until"

    pred: Any


@dataclass(frozen=True)
class TakeStep(BuildStep):
    name: ClassVar[str] = "take"

    n: int


@dataclass(frozen=True)
class DropStep(BuildStep):
    name: ClassVar[str] = "drop"

    n: int


@dataclass(frozen=True)
class EnumerateStep(BuildStep):
    name: ClassVar[str] = "enumerate"


@dataclass(frozen=True)
class ScanStep(BuildStep):
    name: ClassVar[str] = "scan"

    combine: Any
    init: Any


@dataclass(frozen=True)
class AppendStep(BuildStep):
    name: ClassVar[str] = "append"

    other: Any


@dataclass(frozen=True)
class LoopStep(BuildStep):
    name: ClassVar[str] = "loop"


@dataclass(frozen=True)
class FlattenStep(BuildStep):
    name: ClassVar[str] = "flatten"


@dataclass(frozen=True)
class DeepFlattenStep(BuildStep):
    name: ClassVar[str] = "deep_flatten"


# =============================================================================
# Replay
# =============================================================================


def replay(history):
    """
    Rebuild a fresh Infinits from a recorded history.

    Args:
        history: Sequence of build steps, origin first

    Returns:
        A new Infinits whose producer has never been invoked.

    Raises:
        ReplayError: If the history is empty, does not start with an origin
            step, or contains an unknown or misplaced step.
    """
    from infinits.core import Infinits

    if not history:
        raise ReplayError("Cannot replay an empty history")

    origin, *steps = history
    logger.debug("Replaying %d build step(s) from %r", len(history), origin)

    seq = _replay_origin(Infinits, origin)
    for step in steps:
        seq = _replay_step(seq, step)
    return seq


def _replay_origin(cls, step):
    if isinstance(step, RangeStep):
        options = step.options
        return cls.range(start=options.start, end=options.end, step=options.step)
    if isinstance(step, TabulateStep):
        return cls.tabulate(step.f, step.count)
    if isinstance(step, RepeatStep):
        return cls.repeat(step.value, step.count)
    if isinstance(step, FromStep):
        return cls.from_iterable(step.collection)
    if isinstance(step, IterateStep):
        return cls.iterate(step.f, step.seed)
    if isinstance(step, ZipStep):
        operands = [seq.clone() for seq in step.sequences]
        if step.longest:
            return cls.zip_long(*operands, fillvalue=step.fillvalue)
        return cls.zip_short(*operands)

    if isinstance(step, BuildStep):
        raise ReplayError(f"History must start with an origin step, got {step!r}")
    raise ReplayError(f"Unknown build step: {step!r}")


def _replay_step(seq, step):
    if isinstance(step, MapStep):
        return seq.map(step.f, with_index=step.with_index)
    if isinstance(step, FilterStep):
        return seq.filter(step.pred)
    if isinstance(step, UntilStep):
        return seq.until(step.pred)
    if isinstance(step, TakeStep):
        return seq.take(step.n)
    if isinstance(step, DropStep):
        return seq.drop(step.n)
    if isinstance(step, EnumerateStep):
        return seq.enumerate()
    if isinstance(step, ScanStep):
        return seq.scan(step.combine, step.init)
    if isinstance(step, AppendStep):
        return seq.append(step.other.clone())
    if isinstance(step, LoopStep):
        return seq.loop()
    if isinstance(step, FlattenStep):
        return seq.flatten()
    if isinstance(step, DeepFlattenStep):
        return seq.deep_flatten()

    if isinstance(step, BuildStep) and step.origin:
        raise ReplayError(f"Origin step {step!r} can only start a history")
    raise ReplayError(f"Unknown build step: {step!r}")


# =============================================================================
# Description
# =============================================================================


def _render(value) -> str:
    from infinits.core import Infinits

    if isinstance(value, Infinits):
        return repr(value)
    if callable(value):
        return f"<{getattr(value, '__qualname__', type(value).__name__)}>"
    return repr(value)


def describe_step(step) -> str:
    """Render one step as a call, e.g. ``take(5)``."""
    parts = []
    for key, value in step.arguments():
        rendered = _render(value)
        parts.append(f"{key}={rendered}" if key else rendered)
    return f"{step.name}({', '.join(parts)})"


def describe(history) -> str:
    """
    Render a history as the chained calls that would rebuild it.

    >>> describe(Infinits.range(end=3).map(str).history)
    'Infinits.range(start=0, end=3, step=1).map(<str>)'
    """
    if not history:
        return "Infinits(<unrecorded>)"
    origin, *steps = history
    text = f"Infinits.{describe_step(origin)}"
    for step in steps:
        text += f".{describe_step(step)}"
    return text


__all__ = [
    "BuildStep",
    "RangeStep",
    "TabulateStep",
    "RepeatStep",
    "FromStep",
    "IterateStep",
    "ZipStep",
    "MapStep",
    "FilterStep",
    "UntilStep",
    "TakeStep",
    "DropStep",
    "EnumerateStep",
    "ScanStep",
    "AppendStep",
    "LoopStep",
    "FlattenStep",
    "DeepFlattenStep",
    "replay",
    "describe",
    "describe_step",
]
