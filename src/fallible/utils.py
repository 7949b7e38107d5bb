"""Side-effect and nullable helpers."""

from __future__ import annotations

from typing import Callable, TypeVar

from .core.contracts import require_callable, require_result
from .core.result import Err, Ok, Result

T = TypeVar("T")
E = TypeVar("E")

NULL_ERROR = "Value is null or undefined"


def inspect(
    result: Result[T, E],
    on_ok: Callable[[T], object] | None = None,
    on_err: Callable[[E], object] | None = None,
) -> Result[T, E]:
    """Run the matching side effect, if given, and return result unchanged."""
    require_result("inspect", "result", result)
    if isinstance(result, Ok):
        if on_ok is not None:
            require_callable("inspect", "on_ok", on_ok)
            on_ok(result.value)
    elif on_err is not None:
        require_callable("inspect", "on_err", on_err)
        on_err(result.error)
    return result


def tap(result: Result[T, E], f: Callable[[T], object]) -> Result[T, E]:
    require_callable("tap", "f", f)
    return inspect(result, on_ok=f)


def tap_err(result: Result[T, E], f: Callable[[E], object]) -> Result[T, E]:
    require_callable("tap_err", "f", f)
    return inspect(result, on_err=f)


def from_nullable(value: T | None, error: E = NULL_ERROR) -> Result[T, E]:
    """None -> Err(error); anything else (0, "", False included) -> Ok(value).

    Example:
        >>> from_nullable(0)
        Ok(0)
        >>> from_nullable(None, "missing")
        Err('missing')
    """
    return Err(error) if value is None else Ok(value)


def to_nullable(result: Result[T, E]) -> T | None:
    """Success value, or None for Err. Ok(None) and Err are indistinguishable here."""
    require_result("to_nullable", "result", result)
    return result.value if isinstance(result, Ok) else None
