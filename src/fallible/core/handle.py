"""Boundary adapters: turn raised exceptions into Err values.

Wrap calls into code that raises (stdlib, third-party clients, I/O) so the
rest of a pipeline only deals with Results. Only Exception subclasses are
captured; KeyboardInterrupt, SystemExit and asyncio.CancelledError propagate.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from ..config import get_settings
from .contracts import require_callable
from .result import Err, Ok, Result

logger = logging.getLogger("fallible.core")

T = TypeVar("T")
E = TypeVar("E")

UNKNOWN_ERROR = "Unknown error"


def exception_message(exc: BaseException) -> str:
    """Human-readable text of an exception, `Unknown error` when it carries none."""
    return str(exc) or UNKNOWN_ERROR


def _log_caught(func_name: str, exc: Exception) -> None:
    if get_settings().log_caught_exceptions:
        logger.debug("%s captured %s: %s", func_name, type(exc).__name__, exc, exc_info=exc)


def handle(fn: Callable[[], T]) -> Result[T, str]:
    """Call fn(), capturing any raised exception as Err(message).

    Example:
        >>> handle(lambda: int("42"))
        Ok(42)
        >>> handle(lambda: int("x"))
        Err("invalid literal for int() with base 10: 'x'")
    """
    require_callable("handle", "fn", fn)
    try:
        return Ok(fn())
    except Exception as e:
        _log_caught("handle", e)
        return Err(exception_message(e))


async def handle_async(fn: Callable[[], Awaitable[T]]) -> Result[T, str]:
    """Await fn(), capturing any raised exception (sync or async) as Err(message)."""
    require_callable("handle_async", "fn", fn)
    try:
        return Ok(await fn())
    except Exception as e:
        _log_caught("handle_async", e)
        return Err(exception_message(e))


def handle_with(fn: Callable[[], T], error_mapper: Callable[[Exception], E]) -> Result[T, E]:
    """Like handle(), but the raw exception is passed to error_mapper.

    The mapper runs outside the try block: an exception raised by the mapper
    itself propagates.

    Example:
        >>> handle_with(lambda: {}["k"], lambda e: {"kind": type(e).__name__})
        Err({'kind': 'KeyError'})
    """
    require_callable("handle_with", "fn", fn)
    require_callable("handle_with", "error_mapper", error_mapper)
    try:
        value = fn()
    except Exception as e:
        _log_caught("handle_with", e)
        return Err(error_mapper(e))
    return Ok(value)


async def handle_with_async(
    fn: Callable[[], Awaitable[T]], error_mapper: Callable[[Exception], E]
) -> Result[T, E]:
    require_callable("handle_with_async", "fn", fn)
    require_callable("handle_with_async", "error_mapper", error_mapper)
    try:
        value = await fn()
    except Exception as e:
        _log_caught("handle_with_async", e)
        return Err(error_mapper(e))
    return Ok(value)
