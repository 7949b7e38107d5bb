"""Applicative combinators: combine independent Results, build bind chains.

The first operand always wins: when both inputs are Err, the Err of the first
argument is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from ..core.contracts import require_callable, require_result
from ..core.result import Err, Ok, Result
from ..errors import ContractError

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


def zip_(a: Result[T, E], b: Result[U, E]) -> Result[tuple[T, U], E]:
    """Pair two Results. Signature: Result[T,E] → Result[U,E] → Result[(T,U),E]

    Example:
        >>> zip_(Ok(1), Ok("a"))
        Ok((1, 'a'))
        >>> zip_(Err("first"), Err("second"))
        Err('first')
    """
    require_result("zip_", "a", a)
    require_result("zip_", "b", b)
    if isinstance(a, Err):
        return a
    if isinstance(b, Err):
        return b
    return Ok((a.value, b.value))


def apply(r_fn: Result[Callable[[T], U], E], r_value: Result[T, E]) -> Result[U, E]:
    """Applicative apply (<*>): apply a wrapped function to a wrapped value.

    Example:
        >>> apply(Ok(lambda x: x + 1), Ok(41))
        Ok(42)
    """
    require_result("apply", "r_fn", r_fn)
    require_result("apply", "r_value", r_value)
    if isinstance(r_fn, Err):
        return r_fn
    if isinstance(r_value, Err):
        return r_value
    if not callable(r_fn.value):
        raise ContractError.not_callable("apply", "value of r_fn", r_fn.value)
    return Ok(r_fn.value(r_value.value))


@dataclass(frozen=True, slots=True)
class Chain(Generic[T, E]):
    """Immutable builder over and_then.

    Example:
        >>> chain(Ok(2)).then(lambda x: Ok(x * 3)).then(lambda x: Ok(x + 1)).run()
        Ok(7)
    """
    result: Result[T, E]

    def then(self, f: Callable[[T], Result[U, E]]) -> Chain[U, E]:
        require_callable("Chain.then", "f", f)
        if isinstance(self.result, Err):
            return Chain(self.result)
        out = f(self.result.value)
        require_result("Chain.then", "return value of f", out)
        return Chain(out)

    def run(self) -> Result[T, E]:
        return self.result


def chain(initial: Result[T, E]) -> Chain[T, E]:
    require_result("chain", "initial", initial)
    return Chain(initial)
