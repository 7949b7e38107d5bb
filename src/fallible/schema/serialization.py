"""Serialized Result shape: {"type": "Ok", "value": ...} / {"type": "Err", "error": ...}.

Parsing (parse_result), schema building (result_schema and friends) and
dumping (to_dict, dump_result) of Results crossing a process boundary.
JSON is encoded and decoded with orjson.

Example:
    >>> parse_result('{"type": "Ok", "value": 1}', int, str)
    Ok(Ok(1))
    >>> parse_result('{"type": "Maybe"}', int, str)
    Err("Invalid Result type: expected 'Ok' or 'Err', got 'Maybe'")
    >>> dump_result(Err("not found"))
    '{"type":"Err","error":"not found"}'
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from ..core.handle import exception_message
from ..core.result import ERR, OK, Err, Ok, Result
from ..errors import describe_payload
from .validation import JsonInput, load_json, run_parse, run_parse_async
from .validators import ParseOutcome, SchemaError, as_validator, error_message

T = TypeVar("T")
E = TypeVar("E")

Tag = Literal["Ok", "Err"]

NumberError = Union[StrictInt, StrictFloat]


class StructuredError(BaseModel):
    """Error payload with a message and an optional numeric code."""

    model_config = ConfigDict(frozen=True, strict=True)

    message: str = Field(description="Human-readable error message")
    code: int | None = Field(default=None, description="Optional machine-readable code")


def split_shape(data: object) -> Result[tuple[Tag, Any], str]:
    """Check the envelope of a serialized Result and extract (tag, payload)."""
    if not isinstance(data, dict) or "type" not in data:
        return Err("Invalid Result structure: missing 'type' field")
    tag = data["type"]
    if tag == OK:
        return Ok((OK, data["value"])) if "value" in data else Err("Invalid Ok Result: missing 'value' field")
    if tag == ERR:
        return Ok((ERR, data["error"])) if "error" in data else Err("Invalid Err Result: missing 'error' field")
    shown = tag if isinstance(tag, str) else describe_payload(tag)
    return Err(f"Invalid Result type: expected 'Ok' or 'Err', got '{shown}'")


def _rebuild(tag: Tag, data: Any) -> Result[Any, Any]:
    return Ok(data) if tag == OK else Err(data)


# ═════════════════════════════════════════════════════════════════════════════
# Schemas
# ═════════════════════════════════════════════════════════════════════════════


class ResultValidator(Generic[T, E]):
    """Validator of the serialized shape; parsed data is an Ok or an Err.

    Payload issues are located under "value" or "error".

    Example:
        >>> result_schema(int, str).safe_parse({"type": "Err", "error": "boom"}).data
        Err('boom')
    """

    __slots__ = ("value_validator", "error_validator")

    def __init__(self, value_validator: Any, error_validator: Any) -> None:
        self.value_validator = as_validator(value_validator)
        self.error_validator = as_validator(error_validator)

    def _select(self, data: object) -> tuple[Tag, Any, Any] | ParseOutcome[Any]:
        shape = split_shape(data)
        if isinstance(shape, Err):
            return ParseOutcome.failed(SchemaError.single(shape.error, code="invalid_result"))
        tag, payload = shape.value
        return tag, payload, self.value_validator if tag == OK else self.error_validator

    @staticmethod
    def _finish(tag: Tag, outcome: ParseOutcome[Any]) -> ParseOutcome[Result[Any, Any]]:
        if outcome.success:
            return ParseOutcome.passed(_rebuild(tag, outcome.data))
        error = outcome.error
        if isinstance(error, SchemaError):
            error = error.prefixed("value" if tag == OK else "error")
        return ParseOutcome.failed(error)

    def safe_parse(self, data: object) -> ParseOutcome[Result[T, E]]:
        selected = self._select(data)
        if isinstance(selected, ParseOutcome):
            return selected
        tag, payload, validator = selected
        return self._finish(tag, run_parse(validator, payload))

    async def safe_parse_async(self, data: object) -> ParseOutcome[Result[T, E]]:
        selected = self._select(data)
        if isinstance(selected, ParseOutcome):
            return selected
        tag, payload, validator = selected
        return self._finish(tag, await run_parse_async(validator, payload))


def result_schema(value_validator: Any, error_validator: Any) -> ResultValidator[Any, Any]:
    return ResultValidator(value_validator, error_validator)


def string_error_schema(value_validator: Any) -> ResultValidator[Any, str]:
    """Shape whose error payload is a string."""
    return ResultValidator(value_validator, StrictStr)


def number_error_schema(value_validator: Any) -> ResultValidator[Any, int | float]:
    """Shape whose error payload is a number (HTTP status, numeric code)."""
    return ResultValidator(value_validator, NumberError)


def structured_error_schema(value_validator: Any) -> ResultValidator[Any, StructuredError]:
    """Shape whose error payload is {"message": str, "code"?: int}."""
    return ResultValidator(value_validator, StructuredError)


# ═════════════════════════════════════════════════════════════════════════════
# Parsing
# ═════════════════════════════════════════════════════════════════════════════


def _payload_result(tag: Tag, outcome: ParseOutcome[Any]) -> Result[Result[Any, Any], str]:
    if outcome.success:
        return Ok(_rebuild(tag, outcome.data))
    return Err(f"Invalid {tag} value: {error_message(outcome.error)}")


def parse_result(text: JsonInput, value_validator: Any, error_validator: Any) -> Result[Result[Any, Any], str]:
    """Parse a serialized Result from JSON, validating the payload of its variant.

    The outer Result reports parsing problems; the inner one is the decoded Result.
    """
    shape = load_json(text).and_then(split_shape)
    if isinstance(shape, Err):
        return shape
    tag, payload = shape.value
    return _payload_result(tag, run_parse(value_validator if tag == OK else error_validator, payload))


async def parse_result_async(
    text: JsonInput, value_validator: Any, error_validator: Any
) -> Result[Result[Any, Any], str]:
    shape = load_json(text).and_then(split_shape)
    if isinstance(shape, Err):
        return shape
    tag, payload = shape.value
    return _payload_result(tag, await run_parse_async(value_validator if tag == OK else error_validator, payload))


# ═════════════════════════════════════════════════════════════════════════════
# Dumping
# ═════════════════════════════════════════════════════════════════════════════


def _plain(payload: Any) -> Any:
    if isinstance(payload, (Ok, Err)):
        return to_dict(payload)
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    if isinstance(payload, BaseException):
        return exception_message(payload)
    return payload


def _default(obj: Any) -> Any:
    """orjson fallback for nested payloads orjson cannot encode natively."""
    if isinstance(obj, (Ok, Err, BaseModel, BaseException)):
        return _plain(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def to_dict(result: Result[Any, Any]) -> dict[str, Any]:
    """Serialized shape as a dict. Nested Results are converted too."""
    if isinstance(result, Ok):
        return {"type": OK, "value": _plain(result.value)}
    return {"type": ERR, "error": _plain(result.error)}


def dump_result(result: Result[Any, Any]) -> str:
    return orjson.dumps(to_dict(result), default=_default).decode()
