"""
infinits.producers - Element producers (generators)

Every function in this module is a generator function. Calling one returns a
fresh cursor with its own state, which is what lets a sequence hand out any
number of independent traversals.

Transformations never receive a live cursor. They receive the upstream
*factory* (a zero-argument callable returning an iterator) and invoke it
themselves when the cursor is first advanced, so no upstream element is
computed before the downstream consumer asks for one.

Categories:
- Origins: range, tabulate, repeat, iterable, iterate
- Single-upstream transformations: map, filter, until, take, drop, enumerate,
  scan, inspect, loop, flatten, deep_flatten
- Multi-upstream transformations: append, zip_long, zip_short
"""

from itertools import zip_longest
from typing import Any, Callable, Iterable, Iterator

from infinits.types import MISSING, RangeOptions

Factory = Callable[[], Iterator[Any]]

# Marks an exhausted cursor; distinct from MISSING, which is a legal element
_DONE = object()


# =============================================================================
# Origins
# =============================================================================


def range_values(options: RangeOptions):
    """Yield start, start+step, ... while the value has not crossed the end.

    A zero step never moves: without an explicit end it repeats start
    forever, with one it yields nothing.
    """
    start, step = options.start, options.step
    if step == 0:
        if options.end is None:
            while True:
                yield start
        return

    end = options.resolved_end
    value = start
    if step > 0:
        while value < end:
            yield value
            value += step
    else:
        while value > end:
            yield value
            value += step


def tabulate_values(f, count):
    """Yield f(0), f(1), ... f(count - 1)."""
    idx = 0
    while idx < count:
        yield f(idx)
        idx += 1


def repeat_values(value, count):
    """Yield value, count times (count may be infinite)."""
    idx = 0
    while idx < count:
        yield value
        idx += 1


def iterable_values(collection: Iterable):
    """Yield the elements of a collection in order."""
    yield from collection


def iterate_values(f, seed):
    """Yield seed, f(seed), f(f(seed)), ... forever."""
    current = seed
    while True:
        yield current
        current = f(current)


# =============================================================================
# Single-upstream transformations
# =============================================================================


def map_values(source: Factory, f, with_index: bool = False):
    if with_index:
        for index, value in enumerate(source()):
            yield f(value, index)
    else:
        for value in source():
            yield f(value)


def filter_values(source: Factory, pred):
    for value in source():
        if pred(value):
            yield value


def until_values(source: Factory, pred):
    """Yield values up to, and excluding, the first one matching pred."""
    for value in source():
        if pred(value):
            return
        yield value


def take_values(source: Factory, n):
    # Stops right after the n-th value so the upstream is never over-pulled
    if n <= 0:
        return
    taken = 0
    for value in source():
        yield value
        taken += 1
        if taken >= n:
            return


def drop_values(source: Factory, n):
    it = source()
    # Skip n items
    skipped = 0
    while skipped < n:
        if next(it, _DONE) is _DONE:
            return
        skipped += 1
    # Yield the rest
    yield from it


def enumerate_values(source: Factory):
    for index, value in enumerate(source()):
        yield (value, index)


def scan_values(source: Factory, combine, init):
    """Yield every intermediate accumulator, never init itself."""
    acc = init
    for value in source():
        acc = combine(acc, value)
        yield acc


def inspect_values(source: Factory, visit):
    for value in source():
        visit(value)
        yield value


def loop_values(source: Factory):
    """Cycle through the upstream forever, starting a fresh cursor each lap.

    A lap that produces nothing ends the loop.
    """
    while True:
        produced = False
        for value in source():
            produced = True
            yield value
        if not produced:
            return


def flatten_values(source: Factory, nested_type: type):
    """Splice one level of nested sequences into the stream."""
    for value in source():
        if isinstance(value, nested_type):
            yield from value
        else:
            yield value


def deep_flatten_values(source: Factory, nested_type: type):
    """Splice nested sequences at any depth.

    Keeps an explicit stack of cursors instead of recursing, so arbitrarily
    deep nesting does not hit the interpreter recursion limit.
    """
    stack: list[Iterator[Any]] = [source()]
    while stack:
        value = next(stack[-1], _DONE)
        if value is _DONE:
            stack.pop()
        elif isinstance(value, nested_type):
            stack.append(iter(value))
        else:
            yield value


# =============================================================================
# Multi-upstream transformations
# =============================================================================


def append_values(source: Factory, other: Factory):
    yield from source()
    yield from other()


def zip_long_values(sources: tuple[Factory, ...], fillvalue=MISSING):
    """Yield tuples until every source is exhausted, padding with fillvalue."""
    yield from zip_longest(*(source() for source in sources), fillvalue=fillvalue)


def zip_short_values(sources: tuple[Factory, ...]):
    """Yield tuples until the first source is exhausted."""
    if not sources:
        return
    cursors = [source() for source in sources]
    while True:
        row = []
        for cursor in cursors:
            value = next(cursor, _DONE)
            if value is _DONE:
                return
            row.append(value)
        yield tuple(row)
