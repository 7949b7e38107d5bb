"""Result/Either type for explicit success/failure values.

A closed sum type made of two immutable variants:
- Ok(value): success
- Err(error): failure

Each variant is its own class, so the variant is known from the type and no
runtime flag is consulted. Both carry the same method set:
- Functor: map, map_err
- Bifunctor: bimap
- Monad: flat_map / and_then
- Railway helpers: or_else, inspect, inspect_err, match

Examples:
    >>> Ok(42).map(lambda x: x * 2).unwrap()
    84
    >>> Err("fail").map(lambda x: x * 2).unwrap_err()
    'fail'
    >>> match Ok(5).flat_map(lambda x: Ok(x * 2) if x > 0 else Err("neg")):
    ...     case Ok(value):
    ...         print(value)
    ...     case Err(error):
    ...         print(error)
    10
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, ClassVar, Generic, Literal, NoReturn, TypeAlias, TypeGuard, TypeVar, Union

from ..config import get_settings
from ..errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type

# Discriminants, also used as the "type" field of the serialized shape
OK: Literal["Ok"] = "Ok"
ERR: Literal["Err"] = "Err"


@dataclass(frozen=True, slots=True, repr=False)
class Ok(Generic[T]):
    """Success variant. `value` may be anything, None included."""

    value: T
    tag: ClassVar[Literal["Ok"]] = OK

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    # ─── Value Extraction ────────────────────────────────────────────

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raises UnwrapError: there is no error to extract."""
        raise UnwrapError(f"unwrap_err() on Ok: {self.value!r}", self.value)

    def unwrap_or(self, default: object) -> T:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, f: Callable[[object], object]) -> T:  # noqa: ARG002
        return self.value

    def expect(self, msg: str) -> T:  # noqa: ARG002
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        raise UnwrapError(f"{msg}: {self.value!r}", self.value)

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply f to the value. Signature: Result[T,E] → (T→U) → Result[U,E]"""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[object], object]) -> Ok[T]:  # noqa: ARG002
        return self

    def bimap(self, ok_fn: Callable[[T], U], err_fn: Callable[[object], object]) -> Ok[U]:  # noqa: ARG002
        return Ok(ok_fn(self.value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). f decides whether the chain keeps going."""
        return f(self.value)

    and_then = flat_map

    def or_else(self, f: Callable[[object], object]) -> Ok[T]:  # noqa: ARG002
        return self

    # ─── Inspection ──────────────────────────────────────────────────

    def ok(self) -> T:
        return self.value

    def err(self) -> None:
        return None

    def inspect(self, f: Callable[[T], object]) -> Ok[T]:
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[object], object]) -> Ok[T]:  # noqa: ARG002
        return self

    def match(self, *, ok: Callable[[T], U], err: Callable[[object], U]) -> U:  # noqa: ARG002
        return ok(self.value)

    def to_tuple(self) -> tuple[T, None]:
        return (self.value, None)

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Err(Generic[E]):
    """Failure variant. `error` may be a string, a record or an exception instance."""

    error: E
    tag: ClassVar[Literal["Err"]] = ERR

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    # ─── Value Extraction ────────────────────────────────────────────

    def unwrap(self) -> NoReturn:
        """Escalate the error into an exception.

        An exception payload is raised as-is (identity and traceback kept).
        A string becomes the UnwrapError message; any other payload is
        serialized into it.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError.from_payload(self.error, limit=get_settings().unwrap_payload_limit)

    def unwrap_err(self) -> E:
        return self.error

    def unwrap_or(self, default: U) -> U:
        return default

    def unwrap_or_else(self, f: Callable[[E], U]) -> U:
        return f(self.error)

    def expect(self, msg: str) -> NoReturn:
        raise UnwrapError(f"{msg}: {self.error!r}", self.error)

    def expect_err(self, msg: str) -> E:  # noqa: ARG002
        return self.error

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, f: Callable[[object], object]) -> Err[E]:  # noqa: ARG002
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Apply f to the error. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Err(f(self.error))

    def bimap(self, ok_fn: Callable[[object], object], err_fn: Callable[[E], F]) -> Err[F]:  # noqa: ARG002
        return Err(err_fn(self.error))

    def flat_map(self, f: Callable[[object], object]) -> Err[E]:  # noqa: ARG002
        return self

    and_then = flat_map

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from the error by producing a new Result."""
        return f(self.error)

    # ─── Inspection ──────────────────────────────────────────────────

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self.error

    def inspect(self, f: Callable[[object], object]) -> Err[E]:  # noqa: ARG002
        return self

    def inspect_err(self, f: Callable[[E], object]) -> Err[E]:
        f(self.error)
        return self

    def match(self, *, ok: Callable[[object], U], err: Callable[[E], U]) -> U:  # noqa: ARG002
        return err(self.error)

    def to_tuple(self) -> tuple[None, E]:
        return (None, self.error)

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        return False

    def __iter__(self) -> Iterator[object]:
        return iter(())

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]


# ═════════════════════════════════════════════════════════════════════════════
# Function-style API
# ═════════════════════════════════════════════════════════════════════════════


def ok(value: T) -> Result[T, E]:
    """Construct the Ok variant."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct the Err variant."""
    return Err(error)


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)


def is_result(value: object) -> TypeGuard[Result[object, object]]:
    return isinstance(value, (Ok, Err))


def unwrap(result: Result[T, E]) -> T:
    """Extract the success value, raising on Err.

    Use only at true program boundaries: this is the single place where an
    Err is turned back into an exception. See Err.unwrap for the rules.
    """
    return result.unwrap()


def unwrap_or(result: Result[T, E], default: T) -> T:
    """Extract the success value or return default. Never raises."""
    return result.value if isinstance(result, Ok) else default


def match(result: Result[T, E], *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
    """Exhaustive dispatch: calls exactly one of the handlers.

    Example:
        >>> match(Ok(42), ok=lambda x: f"success: {x}", err=lambda e: f"failed: {e}")
        'success: 42'
    """
    if isinstance(result, Ok):
        return ok(result.value)
    return err(result.error)
