"""Validator collaborators for the schema adapter.

Anything exposing `safe_parse(data)` (and optionally `safe_parse_async(data)`)
returning an object with `success`, `data` and `error` attributes is a
validator. PydanticValidator is the built-in one: it wraps a pydantic
TypeAdapter, so models, builtins, unions and Annotated constraints all work.

Optimizations:
- TypeAdapter built once per validator (schema generation is the slow part)
- validator_for() caches one validator per hashable type
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Awaitable, Callable, Generic, Protocol, Sequence, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import ContractError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

# Refinement check: value -> True (pass) | False (fail with default msg) | str (fail with custom msg)
Check = Callable[[Any], "bool | str | Awaitable[bool | str]"]

Path = tuple[str | int, ...]


# ═════════════════════════════════════════════════════════════════════════════
# Error Model
# ═════════════════════════════════════════════════════════════════════════════


class Issue(BaseModel):
    """Single validation problem at a location in the input."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(default=(), description="Location of the problem, outermost first")
    message: str = Field(description="Human-readable description")
    code: str = Field(default="custom", description="Machine-readable kind (pydantic error type)")

    def render(self) -> str:
        return f"{'.'.join(map(str, self.path))}: {self.message}" if self.path else self.message


class SchemaError(BaseModel):
    """Aggregate validation failure: a readable message plus every issue."""

    model_config = ConfigDict(frozen=True)

    message: str
    issues: tuple[Issue, ...] = ()

    @classmethod
    def from_issues(cls, issues: Sequence[Issue]) -> SchemaError:
        return cls(message="; ".join(i.render() for i in issues), issues=tuple(issues))

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> SchemaError:
        """Flatten a pydantic ValidationError."""
        return cls.from_issues([
            Issue(path=tuple(e["loc"]), message=e["msg"], code=e["type"])
            for e in exc.errors(include_url=False)
        ])

    @classmethod
    def single(cls, message: str, *, path: Path = (), code: str = "custom") -> SchemaError:
        return cls.from_issues([Issue(path=path, message=message, code=code)])

    def prefixed(self, *prefix: str | int) -> SchemaError:
        """Same issues, located under prefix."""
        return SchemaError.from_issues([i.model_copy(update={"path": (*prefix, *i.path)}) for i in self.issues])


def error_message(error: object) -> str:
    """Message of a validator error, whatever validator produced it."""
    message = getattr(error, "message", None)
    return message if isinstance(message, str) else str(error)


# ═════════════════════════════════════════════════════════════════════════════
# Protocols
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ParseOutcome(Generic[T]):
    """Outcome of safe_parse: data when success is True, error otherwise."""
    success: bool
    data: T | None = None
    error: Any = None

    @classmethod
    def passed(cls, data: T) -> ParseOutcome[T]: return cls(True, data)

    @classmethod
    def failed(cls, error: Any) -> ParseOutcome[T]: return cls(False, None, error)


@runtime_checkable
class Validator(Protocol[T_co]):
    def safe_parse(self, data: object) -> ParseOutcome[T_co]: ...


@runtime_checkable
class AsyncValidator(Protocol[T_co]):
    async def safe_parse_async(self, data: object) -> ParseOutcome[T_co]: ...


# ═════════════════════════════════════════════════════════════════════════════
# Pydantic Adapter
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Refinement:
    """Immutable extra check run after type validation succeeds."""
    check: Check
    message: str


def _verdict(outcome: bool | str, message: str) -> str | None:
    """Failure message for a check outcome, None when it passed."""
    if isinstance(outcome, str):
        return outcome
    return None if outcome else message


class PydanticValidator(Generic[T]):
    """Validator backed by a pydantic TypeAdapter.

    Lax by default ("5" becomes 5); with strict=True inputs must already
    have the target type, as validator_for() builds them.

    Example:
        >>> v = PydanticValidator(int).refine(lambda n: n > 0, "must be positive")
        >>> v.safe_parse("5").data
        5
        >>> v.safe_parse(-1).error.message
        'must be positive'
    """

    __slots__ = ("type_", "strict", "_adapter", "_refinements")

    def __init__(
        self,
        type_: Any,
        refinements: Sequence[Refinement] = (),
        *,
        strict: bool = False,
        adapter: TypeAdapter[T] | None = None,
    ) -> None:
        self.type_ = type_
        self.strict = strict
        self._adapter: TypeAdapter[T] = adapter if adapter is not None else TypeAdapter(type_)
        self._refinements = tuple(refinements)

    def __repr__(self) -> str:
        return f"PydanticValidator({getattr(self.type_, '__name__', self.type_)!r}, strict={self.strict}, refinements={len(self._refinements)})"

    def refine(self, check: Check, message: str = "Invalid value") -> PydanticValidator[T]:
        """New validator with an extra check. Chainable; the receiver is unchanged.

        check returns True to pass, False to fail with message, or a string to
        fail with that string. It may be async; such validators only work
        through safe_parse_async.
        """
        if not callable(check):
            raise ContractError.not_callable("refine", "check", check)
        return PydanticValidator(
            self.type_,
            (*self._refinements, Refinement(check, message)),
            strict=self.strict,
            adapter=self._adapter,
        )

    def _coerce(self, data: object) -> ParseOutcome[T]:
        try:
            return ParseOutcome.passed(self._adapter.validate_python(data, strict=self.strict or None))
        except ValidationError as e:
            return ParseOutcome.failed(SchemaError.from_validation_error(e))

    def safe_parse(self, data: object) -> ParseOutcome[T]:
        outcome = self._coerce(data)
        if not outcome.success:
            return outcome
        for ref in self._refinements:
            result = ref.check(outcome.data)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise ContractError("safe_parse: validator has an async refinement, use safe_parse_async")
            if (msg := _verdict(result, ref.message)) is not None:
                return ParseOutcome.failed(SchemaError.single(msg))
        return outcome

    async def safe_parse_async(self, data: object) -> ParseOutcome[T]:
        outcome = self._coerce(data)
        if not outcome.success:
            return outcome
        for ref in self._refinements:
            result = ref.check(outcome.data)
            if inspect.isawaitable(result):
                result = await result
            if (msg := _verdict(result, ref.message)) is not None:
                return ParseOutcome.failed(SchemaError.single(msg))
        return outcome


@lru_cache(maxsize=256)
def _cached_validator(tp: Any) -> PydanticValidator[Any]:
    return PydanticValidator(tp, strict=True)


def validator_for(tp: Any) -> PydanticValidator[Any]:
    """Strict validator for a type, cached when the type is hashable.

    Strict so that serialized payloads are checked, not coerced: "5" is not an int.
    """
    try:
        hash(tp)
    except TypeError:
        return PydanticValidator(tp, strict=True)
    return _cached_validator(tp)


def as_validator(validator: Any) -> Any:
    """Return validator as-is if it quacks like one, else wrap it as a type."""
    if isinstance(validator, (Validator, AsyncValidator)):
        return validator
    return validator_for(validator)
