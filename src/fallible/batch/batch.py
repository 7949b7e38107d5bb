"""Batch combinators over sequences of Results.

Provides aggregation with:
- Fail-fast collection (all_, all_async, traverse)
- Complete collection (partition, all_settled_async, collect_results)
- One-pass statistics (partition_with, analyze, find_first)
- Generic folding (reduce)

Any iterable is accepted. None entries are skipped: they are neither counted
nor extracted, but they still occupy a position, so reported indices always
refer to the caller's sequence. Input order is preserved everywhere.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Iterable, Iterator, TypeVar

from ..core.contracts import require_callable, require_result
from ..core.result import Err, Ok, Result

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
A = TypeVar("A")


@dataclass(frozen=True, slots=True)
class Partition(Generic[T, E]):
    """All success values and all error values, each in input order."""
    oks: list[T] = field(default_factory=list)
    errors: list[E] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PartitionStats(Generic[T, E]):
    """Partition plus counts, computed in the same pass."""
    oks: list[T]
    errors: list[E]
    ok_count: int
    error_count: int
    total: int


@dataclass(frozen=True, slots=True)
class BatchStats:
    """Counts only. total excludes skipped None entries."""
    ok_count: int
    error_count: int
    total: int
    has_errors: bool
    is_empty: bool


@dataclass(frozen=True, slots=True)
class FirstFound(Generic[T, E]):
    """First Ok and first Err with their positions (-1 when not found).

    Use the indices to tell "not found" apart from a found None payload.
    """
    first_ok: T | None
    first_error: E | None
    ok_index: int
    error_index: int

    @property
    def found_ok(self) -> bool: return self.ok_index >= 0

    @property
    def found_error(self) -> bool: return self.error_index >= 0


def _present(func_name: str, results: Iterable[Result[T, E] | None]) -> Iterator[tuple[int, Result[T, E]]]:
    """Enumerate results, skipping None. Truthiness is never used: Err is falsy."""
    for i, r in enumerate(results):
        if r is None:
            continue
        require_result(func_name, f"results[{i}]", r)
        yield i, r


# ═════════════════════════════════════════════════════════════════════════════
# Fail-fast collection
# ═════════════════════════════════════════════════════════════════════════════


def all_(results: Iterable[Result[T, E] | None]) -> Result[list[T], E]:
    """Convert a sequence of Results into a Result of list.

    Fails fast on the first Err: later elements are not consumed.

    Type signature: [Result[T, E]] -> Result[[T], E]

    Example:
        >>> all_([Ok(1), Ok(2), Ok(3)])
        Ok([1, 2, 3])
        >>> all_([Ok(1), Err("fail"), Ok(3)])
        Err('fail')
    """
    values: list[T] = []
    for _, r in _present("all_", results):
        if isinstance(r, Err):
            return r
        values.append(r.value)
    return Ok(values)


async def all_async(awaitables: Iterable[Awaitable[Result[T, E] | None]]) -> Result[list[T], E]:
    """Await every awaitable concurrently, then collect as all_ does.

    Every awaitable is started before any is inspected, so there is no
    early cancellation: an Err at position 0 still lets the others finish.
    """
    return all_(await asyncio.gather(*awaitables))


async def all_settled_async(awaitables: Iterable[Awaitable[Result[T, E] | None]]) -> Partition[T, E]:
    """Await every awaitable concurrently and partition the outcomes. Never fails."""
    return partition(await asyncio.gather(*awaitables))


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items and collect fail-fast. f is not called past the first Err.

    Type signature: [T] -> (T -> Result[U, E]) -> Result[[U], E]

    Example:
        >>> traverse(["1", "2"], lambda s: Ok(int(s)) if s.isdigit() else Err(f"invalid: {s}"))
        Ok([1, 2])
    """
    require_callable("traverse", "f", f)
    return all_(f(item) for item in items)


# ═════════════════════════════════════════════════════════════════════════════
# Complete collection
# ═════════════════════════════════════════════════════════════════════════════


def oks(results: Iterable[Result[T, E] | None]) -> list[T]:
    return [r.value for _, r in _present("oks", results) if isinstance(r, Ok)]


def errs(results: Iterable[Result[T, E] | None]) -> list[E]:
    return [r.error for _, r in _present("errs", results) if isinstance(r, Err)]


def partition(results: Iterable[Result[T, E] | None]) -> Partition[T, E]:
    """Split into success values and error values in one pass.

    Example:
        >>> partition([Ok(1), Err("x"), Ok(2)])
        Partition(oks=[1, 2], errors=['x'])
    """
    out: Partition[T, E] = Partition()
    for _, r in _present("partition", results):
        if isinstance(r, Ok):
            out.oks.append(r.value)
        else:
            out.errors.append(r.error)
    return out


def collect_results(results: Iterable[Result[T, E] | None]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating every error instead of failing fast.

    Type signature: [Result[T, E]] -> Result[[T], [E]]

    Example:
        >>> collect_results([Ok(1), Err("e1"), Ok(3), Err("e2")])
        Err(['e1', 'e2'])
    """
    p = partition(results)
    return Err(p.errors) if p.errors else Ok(p.oks)


# ═════════════════════════════════════════════════════════════════════════════
# Statistics
# ═════════════════════════════════════════════════════════════════════════════


def partition_with(results: Iterable[Result[T, E] | None]) -> PartitionStats[T, E]:
    """Partition plus counts in a single pass."""
    p = partition(results)
    ok_count, error_count = len(p.oks), len(p.errors)
    return PartitionStats(p.oks, p.errors, ok_count, error_count, ok_count + error_count)


def analyze(results: Iterable[Result[T, E] | None]) -> BatchStats:
    """Count successes and failures without extracting payloads.

    Example:
        >>> analyze([Ok(1), None, Err("x")])
        BatchStats(ok_count=1, error_count=1, total=2, has_errors=True, is_empty=False)
    """
    ok_count = error_count = 0
    for _, r in _present("analyze", results):
        if isinstance(r, Ok):
            ok_count += 1
        else:
            error_count += 1
    total = ok_count + error_count
    return BatchStats(ok_count, error_count, total, error_count > 0, total == 0)


def find_first(results: Iterable[Result[T, E] | None]) -> FirstFound[T, E]:
    """Locate the first Ok and the first Err; stops consuming once both are found."""
    first_ok: T | None = None
    first_error: E | None = None
    ok_index = error_index = -1
    for i, r in _present("find_first", results):
        if isinstance(r, Ok):
            if ok_index < 0:
                first_ok, ok_index = r.value, i
        elif error_index < 0:
            first_error, error_index = r.error, i
        if ok_index >= 0 and error_index >= 0:
            break
    return FirstFound(first_ok, first_error, ok_index, error_index)


# ═════════════════════════════════════════════════════════════════════════════
# Folding
# ═════════════════════════════════════════════════════════════════════════════


def reduce(
    results: Iterable[Result[T, E] | None],
    *,
    on_ok: Callable[[A, T, int], A],
    on_err: Callable[[A, E, int], A],
    initial: A,
) -> A:
    """Fold left to right with a handler per variant.

    Each handler receives (accumulator, payload, index) where index is the
    position in the input sequence.

    Example:
        >>> reduce([Ok(2), Err("x"), Ok(3)], on_ok=lambda a, v, _: a + v, on_err=lambda a, _e, _i: a, initial=0)
        5
    """
    require_callable("reduce", "on_ok", on_ok)
    require_callable("reduce", "on_err", on_err)
    acc = initial
    for i, r in _present("reduce", results):
        acc = on_ok(acc, r.value, i) if isinstance(r, Ok) else on_err(acc, r.error, i)
    return acc


def first(results: Iterable[Result[T, E] | None]) -> Result[T, list[E]]:
    """First Ok (short-circuit), else Err of every error seen. Empty input gives Err([]).

    Example:
        >>> first([Err("a"), Ok(1), Err("b")])
        Ok(1)
        >>> first([Err("a"), Err("b")])
        Err(['a', 'b'])
    """
    errors: list[E] = []
    for _, r in _present("first", results):
        if isinstance(r, Ok):
            return r
        errors.append(r.error)
    return Err(errors)
