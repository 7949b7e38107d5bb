"""Transform combinators in function style, sync and async.

The function-style counterparts of Ok.map / Err.map_err / flat_map, plus
async siblings that take an awaitable of a Result and accept transformers
that are either plain functions or coroutine functions.

Example:
    >>> pipe(Ok(2), lambda x: Ok(x + 1), lambda x: Ok(x * 10))
    Ok(30)
    >>> pipe(Ok(2), lambda _: Err("stop"), lambda x: Ok(x * 10))
    Err('stop')
"""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable, TypeVar

from .core.contracts import require_callable, require_result
from .core.result import Err, Ok, Result

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


async def _resolve(value: object) -> object:
    """Await value if it is awaitable, so transformers may be sync or async."""
    return await value if inspect.isawaitable(value) else value


# ═════════════════════════════════════════════════════════════════════════════
# Synchronous
# ═════════════════════════════════════════════════════════════════════════════


def map(result: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:  # noqa: A001
    """Ok(v) → Ok(f(v)); Err is returned unchanged and f is not called."""
    require_result("map", "result", result)
    require_callable("map", "f", f)
    return Ok(f(result.value)) if isinstance(result, Ok) else result


def map_err(result: Result[T, E], f: Callable[[E], F]) -> Result[T, F]:
    """Err(e) → Err(f(e)); Ok is returned unchanged and f is not called."""
    require_result("map_err", "result", result)
    require_callable("map_err", "f", f)
    return Err(f(result.error)) if isinstance(result, Err) else result


def and_then(result: Result[T, E], f: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Monadic bind: Ok(v) → f(v); Err short-circuits."""
    require_result("and_then", "result", result)
    require_callable("and_then", "f", f)
    if isinstance(result, Err):
        return result
    out = f(result.value)
    require_result("and_then", "return value of f", out)
    return out


def pipe(initial: Result[T, E], *ops: Callable[[object], Result[object, E]]) -> Result[object, E]:
    """Thread a Result through ops left to right, stopping at the first Err.

    Equivalent to `and_then(... and_then(initial, ops[0]) ..., ops[-1])`:
    ops after the first Err are never called.
    """
    require_result("pipe", "initial", initial)
    for i, op in enumerate(ops):
        require_callable("pipe", f"ops[{i}]", op)
    result: Result[object, E] = initial
    for op in ops:
        if isinstance(result, Err):
            break
        result = op(result.value)
        require_result("pipe", "return value of an op", result)
    return result


# ═════════════════════════════════════════════════════════════════════════════
# Asynchronous
# ═════════════════════════════════════════════════════════════════════════════


async def map_async(
    result: Awaitable[Result[T, E]], f: Callable[[T], U | Awaitable[U]]
) -> Result[U, E]:
    """Await the result, then map its value with a sync or async f."""
    require_callable("map_async", "f", f)
    r = await result
    require_result("map_async", "awaited result", r)
    if isinstance(r, Err):
        return r
    return Ok(await _resolve(f(r.value)))


async def map_err_async(
    result: Awaitable[Result[T, E]], f: Callable[[E], F | Awaitable[F]]
) -> Result[T, F]:
    """Await the result, then map its error with a sync or async f."""
    require_callable("map_err_async", "f", f)
    r = await result
    require_result("map_err_async", "awaited result", r)
    if isinstance(r, Ok):
        return r
    return Err(await _resolve(f(r.error)))


async def and_then_async(
    result: Awaitable[Result[T, E]],
    f: Callable[[T], Result[U, E] | Awaitable[Result[U, E]]],
) -> Result[U, E]:
    """Await the result, then bind it with a sync or async f."""
    require_callable("and_then_async", "f", f)
    r = await result
    require_result("and_then_async", "awaited result", r)
    if isinstance(r, Err):
        return r
    out = await _resolve(f(r.value))
    require_result("and_then_async", "return value of f", out)
    return out
