"""Do-notation for Results: write straight-line code, exit early on Err.

Two ways to write a routine:

Generator mode - yield a Result, get its value back:
    >>> def checkout():
    ...     user = yield fetch_user(1)
    ...     cart = yield load_cart(user)
    ...     return cart.total
    >>> safe(checkout)

Step mode - a plain function receiving `step`:
    >>> def checkout(step):
    ...     user = step(fetch_user(1))
    ...     cart = step(load_cart(user))
    ...     return cart.total
    >>> safe(checkout)

Either way the first Err ends the routine and becomes the outcome, the
routine's finally blocks and context managers still run, and a normal return
value x becomes Ok(x). Exceptions raised by the routine propagate unchanged.

State machine:
    Running -(Ok)-> Running
    Running -(Err)-> Aborted(err)
    Running -(return)-> Completed(Ok(value))
    Running -(raise)-> propagate
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Generator, TypeVar

from ..core.contracts import require_callable, require_result
from ..core.result import Err, Ok, Result
from ..errors import ContractError

logger = logging.getLogger("fallible.patterns")

T = TypeVar("T")
E = TypeVar("E")

Routine = Callable[..., Any]


class _Abort(BaseException):
    """Non-local exit out of a step-mode routine.

    Derives from BaseException so `except Exception` blocks in user code do
    not intercept it. `scope` ties the abort to the safe() call that created
    the step, so nested safe() calls never catch each other's exits.
    """

    __slots__ = ("result", "scope")

    def __init__(self, result: Err[Any], scope: object) -> None:
        super().__init__(result)
        self.result = result
        self.scope = scope


def _close(gen: Generator[Any, Any, Any]) -> None:
    """Close the generator so its finally blocks run. Failures here are logged, never raised."""
    try:
        gen.close()
    except Exception:
        logger.debug("Cleanup of routine %s failed", getattr(gen, "__name__", gen), exc_info=True)


def _pending_abort(exc: BaseException, scope: object) -> _Abort | None:
    """The abort of this scope that exc interrupted, found by walking its context chain."""
    seen: set[int] = set()
    ctx = exc.__context__
    while ctx is not None and id(ctx) not in seen:
        if isinstance(ctx, _Abort) and ctx.scope is scope:
            return ctx
        seen.add(id(ctx))
        ctx = ctx.__context__
    return None


def _cleanup_failed(routine: object, exc: Exception, scope: object) -> Err[Any] | None:
    """Err to return when exc was raised by cleanup code unwinding an abort, else None."""
    if (abort := _pending_abort(exc, scope)) is None:
        return None
    logger.debug("Cleanup of routine %s failed", getattr(routine, "__name__", routine), exc_info=exc)
    return abort.result


def _check_yield(func_name: str, value: object) -> None:
    require_result(func_name, "yielded value", value, force=True)


def _short_circuit(func_name: str, index: int, result: Err[Any]) -> Err[Any]:
    logger.debug("%s short-circuited at step %d: %r", func_name, index, result.error)
    return result


# ═════════════════════════════════════════════════════════════════════════════
# Synchronous
# ═════════════════════════════════════════════════════════════════════════════


def _drive(gen: Generator[Result[Any, E], Any, T]) -> Result[T, E]:
    index, payload = 0, None
    try:
        while True:
            try:
                yielded = gen.send(payload)
            except StopIteration as stop:
                return Ok(stop.value)
            _check_yield("safe", yielded)
            if isinstance(yielded, Err):
                return _short_circuit("safe", index, yielded)
            payload, index = yielded.value, index + 1
    finally:
        _close(gen)


def _run_steps(routine: Routine) -> Result[Any, Any]:
    scope = object()
    index = 0

    def step(result: Result[T, E]) -> T:
        nonlocal index
        _check_yield("safe", result)
        if isinstance(result, Err):
            raise _Abort(_short_circuit("safe", index, result), scope)
        index += 1
        return result.value

    try:
        value = routine(step)
    except _Abort as abort:
        if abort.scope is not scope:
            raise
        return abort.result
    except Exception as e:
        if (aborted := _cleanup_failed(routine, e, scope)) is None:
            raise
        return aborted
    return Ok(value)


def safe(routine: Routine | Generator[Result[Any, E], Any, T]) -> Result[T, E]:
    """Run a routine, short-circuiting on the first Err.

    Accepts a generator function (called with no arguments), a generator
    object, or a plain function taking a `step` callable.

    Example:
        >>> def total():
        ...     a = yield Ok(1)
        ...     b = yield Ok(2)
        ...     return a + b
        >>> safe(total)
        Ok(3)
        >>> safe(lambda step: step(Ok(1)) + step(Err("no")))
        Err('no')
    """
    if inspect.isgenerator(routine):
        return _drive(routine)
    require_callable("safe", "routine", routine, force=True)
    if inspect.iscoroutinefunction(routine) or inspect.isasyncgenfunction(routine):
        raise ContractError(f"safe: routine {getattr(routine, '__name__', routine)!r} is async, use safe_async")
    if inspect.isgeneratorfunction(routine):
        return _drive(routine())
    return _run_steps(routine)


# ═════════════════════════════════════════════════════════════════════════════
# Asynchronous
# ═════════════════════════════════════════════════════════════════════════════


async def _drive_async(gen: Generator[Any, Any, T]) -> Result[T, Any]:
    """Drive a generator whose yields are Results or awaitables of Results.

    An exception raised while awaiting a yielded awaitable is thrown back into
    the generator at that yield, so the routine may handle it.
    """
    index = 0
    resume, payload = gen.send, None
    try:
        while True:
            try:
                yielded = resume(payload)
            except StopIteration as stop:
                return Ok(stop.value)
            if inspect.isawaitable(yielded):
                try:
                    yielded = await yielded
                except Exception as e:
                    resume, payload = gen.throw, e
                    continue
            _check_yield("safe_async", yielded)
            if isinstance(yielded, Err):
                return _short_circuit("safe_async", index, yielded)
            resume, payload, index = gen.send, yielded.value, index + 1
    finally:
        _close(gen)


async def _run_steps_async(routine: Callable[..., Awaitable[T]]) -> Result[T, Any]:
    scope = object()
    index = 0

    async def step(result: Result[Any, Any] | Awaitable[Result[Any, Any]]) -> Any:
        nonlocal index
        if inspect.isawaitable(result):
            result = await result
        _check_yield("safe_async", result)
        if isinstance(result, Err):
            raise _Abort(_short_circuit("safe_async", index, result), scope)
        index += 1
        return result.value

    try:
        value = await routine(step)
    except _Abort as abort:
        if abort.scope is not scope:
            raise
        return abort.result
    except Exception as e:
        if (aborted := _cleanup_failed(routine, e, scope)) is None:
            raise
        return aborted
    return Ok(value)


async def safe_async(routine: Routine | Generator[Any, Any, T]) -> Result[T, Any]:
    """Async sibling of safe().

    Accepts a generator function (or generator) yielding Results or
    awaitables of Results, or a coroutine function taking an async `step`:

        >>> async def checkout(step):
        ...     user = await step(fetch_user(1))
        ...     return user.name
        >>> await safe_async(checkout)

    Async generator functions are rejected: they cannot return a final value.
    """
    if inspect.isgenerator(routine):
        return await _drive_async(routine)
    require_callable("safe_async", "routine", routine, force=True)
    if inspect.isasyncgenfunction(routine):
        raise ContractError(
            f"safe_async: routine {getattr(routine, '__name__', routine)!r} is an async generator; "
            "use a generator yielding awaitables or a coroutine taking step"
        )
    if inspect.isgeneratorfunction(routine):
        return await _drive_async(routine())
    return await _run_steps_async(routine)
