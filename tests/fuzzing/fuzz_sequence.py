#!/usr/bin/env python3
"""Fuzz testing for Infinits pipelines.

Keeps a small pool of (Infinits, reference list) pairs, grows random
pipelines from them, and checks that every pipeline, its clones, and the
older pipelines it was derived from all still produce their reference
elements.
"""

from itertools import cycle, islice, zip_longest
from typing import Any

from infinits import MISSING, Infinits

from .fuzz import Fuzzer, random_value

MAX_POOL = 6
MAX_REFERENCE = 200


# Pure element functions, usable on any value


def wrap(x):
    return (x, 0)


def tag_index(x, i):
    return (i, x)


def even_repr(x):
    return len(repr(x)) % 2 == 0


def long_repr(x):
    return len(repr(x)) > 6


def running_count(acc, _x):
    return acc + 1


def last_two(acc, x):
    return (acc[1], x)


def doubled(x):
    return Infinits.from_iterable([x, x])


def nested_pair(x):
    return Infinits.from_iterable([Infinits.from_iterable([x]), x])


def _scan(combine, init, values):
    result = []
    acc = init
    for x in values:
        acc = combine(acc, x)
        result.append(acc)
    return result


class SequenceFuzzer(Fuzzer):
    """Fuzz tester that compares Infinits pipelines to plain lists."""

    name = "Sequence"

    def __init__(self, rng=None):
        super().__init__(rng)
        self.pool: list[tuple[Infinits, list]] = []
        self.history: list[tuple[Infinits, list]] = []
        self.inspected: list[Any] = []
        self.max_depth = 0

    def reset(self):
        self.pool = []
        self.history = []
        self.inspected = []
        self.add(*self.random_source())

    def get_stats(self) -> dict[str, Any]:
        return {"Max history depth": self.max_depth}

    def add(self, seq: Infinits, reference: list):
        if len(reference) > MAX_REFERENCE:
            seq = seq.take(MAX_REFERENCE)
            reference = reference[:MAX_REFERENCE]
        self.pool.append((seq, reference))
        self.history.append((seq, reference))
        self.max_depth = max(self.max_depth, len(seq.history))
        if len(self.pool) > MAX_POOL:
            self.pool.pop(0)
        if len(self.history) > 20:
            self.history = self.history[-10:]

    def pick(self) -> tuple[Infinits, list]:
        return self.rng.choice(self.pool)

    # =========================================================================
    # Sources
    # =========================================================================

    def random_source(self) -> tuple[Infinits, list]:
        rng = self.rng
        choice = rng.randint(0, 3)
        if choice == 0:
            start = rng.randint(-20, 20)
            step = rng.choice([-3, -2, -1, 1, 2, 3])
            end = start + step * rng.randint(0, 15)
            return (
                Infinits.range(start=start, end=end, step=step),
                list(range(start, end, step)),
            )
        elif choice == 1:
            count = rng.randint(0, 15)
            factor = rng.randint(-3, 3)
            return (
                Infinits.tabulate(factor.__mul__, count),
                [factor * i for i in range(count)],
            )
        elif choice == 2:
            value = random_value(rng)
            count = rng.randint(0, 10)
            return Infinits.repeat(value, count), [value] * count
        else:
            values = [random_value(rng) for _ in range(rng.randint(0, 12))]
            return Infinits.from_iterable(values), list(values)

    # =========================================================================
    # Operations
    # =========================================================================

    def do_source(self):
        self.add(*self.random_source())
        self.record_op("source")

    def do_map(self):
        seq, ref = self.pick()
        if self.rng.random() < 0.5:
            self.add(seq.map(wrap), [wrap(x) for x in ref])
        else:
            self.add(
                seq.map(tag_index, with_index=True),
                [tag_index(x, i) for i, x in enumerate(ref)],
            )
        self.record_op("map")

    def do_filter(self):
        seq, ref = self.pick()
        self.add(seq.filter(even_repr), [x for x in ref if even_repr(x)])
        self.record_op("filter")

    def do_until(self):
        seq, ref = self.pick()
        expected = []
        for x in ref:
            if long_repr(x):
                break
            expected.append(x)
        self.add(seq.until(long_repr), expected)
        self.record_op("until")

    def do_take(self):
        seq, ref = self.pick()
        n = self.rng.randint(-1, 20)
        self.add(seq.take(n), ref[: max(n, 0)])
        self.record_op("take")

    def do_drop(self):
        seq, ref = self.pick()
        n = self.rng.randint(-1, 10)
        self.add(seq.drop(n), ref[max(n, 0) :])
        self.record_op("drop")

    def do_enumerate(self):
        seq, ref = self.pick()
        self.add(seq.enumerate(), [(x, i) for i, x in enumerate(ref)])
        self.record_op("enumerate")

    def do_scan(self):
        seq, ref = self.pick()
        if self.rng.random() < 0.5:
            self.add(seq.scan(running_count, 0), _scan(running_count, 0, ref))
        else:
            init = (None, None)
            self.add(seq.scan(last_two, init), _scan(last_two, init, ref))
        self.record_op("scan")

    def do_inspect(self):
        seq, ref = self.pick()
        self.add(seq.inspect(self.inspected.append), ref)
        self.record_op("inspect")

    def do_append(self):
        (left, left_ref), (right, right_ref) = self.pick(), self.pick()
        self.add(left.append(right), left_ref + right_ref)
        self.record_op("append")

    def do_loop(self):
        seq, ref = self.pick()
        k = self.rng.randint(0, 30)
        expected = list(islice(cycle(ref), k)) if ref else []
        self.add(seq.loop().take(k), expected)
        self.record_op("loop")

    def do_flatten(self):
        seq, ref = self.pick()
        if self.rng.random() < 0.5:
            self.add(seq.map(doubled).flatten(), [y for x in ref for y in (x, x)])
        else:
            self.add(
                seq.map(nested_pair).deep_flatten(), [y for x in ref for y in (x, x)]
            )
        self.record_op("flatten")

    def do_zip(self):
        operands = [self.pick() for _ in range(self.rng.randint(1, 3))]
        seqs = [seq for seq, _ in operands]
        refs = [ref for _, ref in operands]
        if self.rng.random() < 0.5:
            expected = list(zip_longest(*refs, fillvalue=MISSING))
            self.add(Infinits.zip_long(*seqs), expected)
        else:
            self.add(Infinits.zip_short(*seqs), list(zip(*refs)))
        self.record_op("zip")

    def do_clone(self):
        seq, ref = self.pick()
        self.add(seq.clone(), ref)
        self.record_op("clone")

    def do_random_operation(self):
        ops = [
            (self.do_source, 1),
            (self.do_map, 2),
            (self.do_filter, 2),
            (self.do_until, 1),
            (self.do_take, 2),
            (self.do_drop, 2),
            (self.do_enumerate, 1),
            (self.do_scan, 1),
            (self.do_inspect, 1),
            (self.do_append, 2),
            (self.do_loop, 1),
            (self.do_flatten, 1),
            (self.do_zip, 2),
            (self.do_clone, 2),
        ]
        funcs, weights = zip(*ops)
        self.rng.choices(funcs, weights=weights)[0]()

    # =========================================================================
    # Invariants
    # =========================================================================

    def check_invariants(self):
        seq, ref = self.pool[-1]

        # Content check
        values = seq.to_list()
        assert values == ref, (
            f"Content mismatch for {seq!r}:\n  Got: {values[:10]}...\n  "
            f"Reference: {ref[:10]}..."
        )
        assert seq.count() == len(ref)
        assert seq.nth(len(ref)) is MISSING

        # Clones replay the recipe regardless of consumption
        cursor = iter(seq)
        next(cursor, None)
        before = len(self.inspected)
        clone = seq.clone()
        assert clone.to_list() == ref, f"Clone mismatch for {seq!r}"
        assert len(self.inspected) == before, "Clone replayed an inspect step"
        assert list(cursor) == ref[1:], "Clone disturbed a live cursor"

        # Old versions unchanged (persistence)
        for old_seq, old_ref in self.history[-5:]:
            assert old_seq.to_list() == old_ref, f"Persistence violation: {old_seq!r}"
