"""
infinits.core - The Infinits lazy sequence

An Infinits is a lazy, possibly infinite sequence described by two things:
- a producer factory: a zero-argument callable that returns a fresh,
  independent cursor every time it is invoked
- a history: the tuple of build steps that produced it (see infinits.history)

Instances are immutable. Transformations return new instances whose factory
wraps the parent's factory, so nothing runs until a terminal operation pulls
elements through the chain. Because every traversal invokes the factory,
an Infinits can be iterated any number of times and shared freely.

Categories:
- Generators: range, tabulate, repeat, from_iterable, iterate
- Executions: for_each, to_list, reduce, count, nth, find, find_index,
  every, some
- Modifiers: map, filter, until, take, drop, enumerate, scan, inspect,
  append, loop, flatten, deep_flatten, zip_long, zip_short
- Cloning: clone, history

Executions that consume the whole sequence (to_list, reduce, count,
for_each) never return on an infinite sequence. Bounding the sequence first
(take, until) is the caller's job.
"""

from functools import partial
from typing import Any, Callable, Iterable, Iterator, Optional

from infinits import producers
from infinits.history import (
    AppendStep,
    DeepFlattenStep,
    DropStep,
    EnumerateStep,
    FilterStep,
    FlattenStep,
    FromStep,
    IterateStep,
    LoopStep,
    MapStep,
    RangeStep,
    RepeatStep,
    ScanStep,
    TabulateStep,
    TakeStep,
    UntilStep,
    ZipStep,
    describe,
    replay,
)
from infinits.types import (
    INFINITY,
    MISSING,
    MapFn,
    Predicate,
    RangeOptions,
    ReduceFn,
    ScanFn,
    TabulateFn,
    VisitFn,
)


def _check_callable(f, op: str):
    if not callable(f):
        raise TypeError(f"{op} expects a callable, got {type(f).__name__}")


def _check_sequences(values, op: str):
    for value in values:
        if not isinstance(value, Infinits):
            raise TypeError(
                f"{op} expects Infinits operands, got {type(value).__name__}"
            )


class Infinits:
    """
    A lazy sequence that can be rebuilt from its construction history.

    Build instances with the static generators rather than the constructor.
    An instance made directly from a factory has no history and cannot be
    cloned.
    """

    __slots__ = ("_factory", "_history")

    def __init__(self, factory: Callable[[], Iterator[Any]], history=()):
        self._factory = factory
        self._history = tuple(history)

    # =========================================================================
    # Generators
    # =========================================================================

    @staticmethod
    def range(*, start=0, end=None, step=1) -> "Infinits":
        """
        Arithmetic progression start, start+step, ... bounded by end.

        end is exclusive. When omitted the range is unbounded in the direction
        of step. A zero step repeats start forever when end is omitted and is
        empty otherwise.
        """
        options = RangeOptions(start=start, end=end, step=step)
        return Infinits(
            partial(producers.range_values, options), (RangeStep(options),)
        )

    @staticmethod
    def tabulate(f: TabulateFn, count=INFINITY) -> "Infinits":
        """Sequence of f(0), f(1), ..., f(count - 1)."""
        _check_callable(f, "tabulate")
        return Infinits(
            partial(producers.tabulate_values, f, count), (TabulateStep(f, count),)
        )

    @staticmethod
    def repeat(value, count=INFINITY) -> "Infinits":
        """Sequence of value repeated count times (forever by default)."""
        return Infinits(
            partial(producers.repeat_values, value, count),
            (RepeatStep(value, count),),
        )

    @staticmethod
    def from_iterable(collection: Iterable) -> "Infinits":
        """Sequence of a collection's elements, in order.

        The collection is iterated again on every traversal, so a one-shot
        iterator only yields its elements the first time.
        """
        return Infinits(
            partial(producers.iterable_values, collection), (FromStep(collection),)
        )

    @staticmethod
    def iterate(f: Callable[[Any], Any], seed) -> "Infinits":
        """Infinite sequence of seed, f(seed), f(f(seed)), ..."""
        _check_callable(f, "iterate")
        return Infinits(
            partial(producers.iterate_values, f, seed), (IterateStep(f, seed),)
        )

    @staticmethod
    def zip_long(*sequences: "Infinits", fillvalue=MISSING) -> "Infinits":
        """
        Pair elements positionally across all operands.

        Continues until every operand is exhausted; exhausted operands
        contribute fillvalue (MISSING by default). Each element is a tuple with
        one slot per operand.
        """
        _check_sequences(sequences, "zip_long")
        factories = tuple(seq._factory for seq in sequences)
        return Infinits(
            partial(producers.zip_long_values, factories, fillvalue),
            (ZipStep(tuple(sequences), longest=True, fillvalue=fillvalue),),
        )

    @staticmethod
    def zip_short(*sequences: "Infinits") -> "Infinits":
        """Pair elements positionally, stopping at the first exhausted operand."""
        _check_sequences(sequences, "zip_short")
        factories = tuple(seq._factory for seq in sequences)
        return Infinits(
            partial(producers.zip_short_values, factories),
            (ZipStep(tuple(sequences), longest=False),),
        )

    # =========================================================================
    # Executions
    # =========================================================================

    def __iter__(self) -> Iterator[Any]:
        """Start a new, independent traversal."""
        return iter(self._factory())

    def for_each(self, visit: VisitFn, with_index: bool = False) -> None:
        """Call visit(element), or visit(element, index), for every element."""
        if with_index:
            for index, value in enumerate(self._factory()):
                visit(value, index)
        else:
            for value in self._factory():
                visit(value)

    def to_list(self) -> list:
        """Collect every element into a list."""
        return list(self._factory())

    def reduce(self, combine: ReduceFn, init, with_index: bool = False):
        """Left fold: combine(acc, element) or combine(acc, element, index)."""
        acc = init
        if with_index:
            for index, value in enumerate(self._factory()):
                acc = combine(acc, value, index)
        else:
            for value in self._factory():
                acc = combine(acc, value)
        return acc

    def count(self, predicate: Optional[Predicate] = None) -> int:
        """Count the elements satisfying predicate (all of them by default)."""
        total = 0
        for value in self._factory():
            if predicate is None or predicate(value):
                total += 1
        return total

    def nth(self, n: int, default=MISSING):
        """Return the element at 0-based position n, or default if too short."""
        if n < 0:
            return default
        passed = 0
        for value in self._factory():
            if passed == n:
                return value
            passed += 1
        return default

    def find(self, predicate: Predicate, default=MISSING):
        """Return the first element satisfying predicate, or default."""
        for value in self._factory():
            if predicate(value):
                return value
        return default

    def find_index(self, predicate: Predicate) -> int:
        """Return the index of the first element satisfying predicate, or -1."""
        for index, value in enumerate(self._factory()):
            if predicate(value):
                return index
        return -1

    def every(self, predicate: Predicate) -> bool:
        """Return True if predicate holds for all elements."""
        for value in self._factory():
            if not predicate(value):
                return False
        return True

    def some(self, predicate: Predicate) -> bool:
        """Return True if predicate holds for at least one element."""
        for value in self._factory():
            if predicate(value):
                return True
        return False

    # =========================================================================
    # Modifiers
    # =========================================================================

    def _derive(self, step, producer, *args) -> "Infinits":
        return Infinits(
            partial(producer, self._factory, *args), self._history + (step,)
        )

    def map(self, f: MapFn, with_index: bool = False) -> "Infinits":
        """Apply f(value), or f(value, index), to every element."""
        _check_callable(f, "map")
        return self._derive(MapStep(f, with_index), producers.map_values, f, with_index)

    def filter(self, pred: Predicate) -> "Infinits":
        """Keep the elements satisfying pred."""
        _check_callable(pred, "filter")
        return self._derive(FilterStep(pred), producers.filter_values, pred)

    def until(self, pred: Predicate) -> "Infinits":
        """Stop at, and exclude, the first element satisfying pred."""
        _check_callable(pred, "until")
        return self._derive(UntilStep(pred), producers.until_values, pred)

    def take(self, n: int) -> "Infinits":
        """Keep at most the first n elements."""
        return self._derive(TakeStep(n), producers.take_values, n)

    def drop(self, n: int) -> "Infinits":
        """Skip the first n elements."""
        return self._derive(DropStep(n), producers.drop_values, n)

    def enumerate(self) -> "Infinits":
        """Pair every element with its 0-based index as (value, index)."""
        return self._derive(EnumerateStep(), producers.enumerate_values)

    def scan(self, combine: ScanFn, init) -> "Infinits":
        """Running fold yielding combine(acc, element) for every element.

        init itself is never yielded.
        """
        _check_callable(combine, "scan")
        return self._derive(
            ScanStep(combine, init), producers.scan_values, combine, init
        )

    def inspect(self, visit: Callable[[Any], None]) -> "Infinits":
        """Call visit(value) on every element as it passes through.

        The step is not recorded in the history: clones never run visit.
        """
        _check_callable(visit, "inspect")
        return Infinits(
            partial(producers.inspect_values, self._factory, visit), self._history
        )

    def append(self, other: "Infinits") -> "Infinits":
        """All of this sequence's elements, then all of other's."""
        _check_sequences((other,), "append")
        return self._derive(AppendStep(other), producers.append_values, other._factory)

    def loop(self) -> "Infinits":
        """Repeat the whole sequence forever, restarting it on every lap."""
        return self._derive(LoopStep(), producers.loop_values)

    def flatten(self) -> "Infinits":
        """Splice elements that are themselves Infinits, one level deep."""
        return self._derive(FlattenStep(), producers.flatten_values, Infinits)

    def deep_flatten(self) -> "Infinits":
        """Splice nested Infinits elements at any depth."""
        return self._derive(
            DeepFlattenStep(), producers.deep_flatten_values, Infinits
        )

    # =========================================================================
    # Cloning
    # =========================================================================

    @property
    def history(self) -> tuple:
        """The recorded build steps, origin first."""
        return self._history

    def clone(self) -> "Infinits":
        """
        Rebuild this sequence from its history.

        The clone replays the recipe, not the data: it starts from a fresh
        origin, so it is unaffected by how far this instance has been
        consumed. Nested sequence arguments are cloned too. inspect() steps
        are not replayed.
        """
        return replay(self._history)

    def __repr__(self):
        return describe(self._history)


zip_long = Infinits.zip_long
zip_short = Infinits.zip_short
