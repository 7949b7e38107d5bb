"""Validate untrusted data into Results.

Example:
    >>> validate({"id": 1, "name": "Ada"}, User)
    Ok(User(id=1, name='Ada'))
    >>> validate({"id": "x"}, User)
    Err('Validation failed: id: Input should be a valid integer, ...')
    >>> parse_json("{oops", User)
    Err('Invalid JSON: ...')
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import orjson

from ..core.contracts import require_callable
from ..core.result import Err, Ok, Result
from ..errors import ContractError
from .validators import ParseOutcome, as_validator, error_message

logger = logging.getLogger("fallible.schema")

T = TypeVar("T")
E = TypeVar("E")

JsonInput = str | bytes | bytearray | memoryview


def run_parse(validator: Any, data: object) -> ParseOutcome[Any]:
    v = as_validator(validator)
    if not hasattr(v, "safe_parse"):
        raise ContractError(f"{type(v).__name__} only supports async parsing, use the *_async variant")
    return v.safe_parse(data)


async def run_parse_async(validator: Any, data: object) -> ParseOutcome[Any]:
    """Prefer safe_parse_async, fall back to safe_parse."""
    v = as_validator(validator)
    if hasattr(v, "safe_parse_async"):
        return await v.safe_parse_async(data)
    return v.safe_parse(data)


def _to_result(outcome: ParseOutcome[T]) -> Result[T, str]:
    if outcome.success:
        return Ok(outcome.data)
    message = error_message(outcome.error)
    logger.debug("Validation failed: %s", message)
    return Err(f"Validation failed: {message}")


def _to_result_with(outcome: ParseOutcome[T], error_mapper: Callable[[Any], E]) -> Result[T, E]:
    if outcome.success:
        return Ok(outcome.data)
    logger.debug("Validation failed: %s", error_message(outcome.error))
    return Err(error_mapper(outcome.error))


def load_json(text: JsonInput) -> Result[Any, str]:
    """Decode JSON with orjson. Malformed input -> Err("Invalid JSON: <parser message>")."""
    try:
        return Ok(orjson.loads(text))
    except orjson.JSONDecodeError as e:
        return Err(f"Invalid JSON: {e}")


# ═════════════════════════════════════════════════════════════════════════════
# Validation
# ═════════════════════════════════════════════════════════════════════════════


def validate(data: object, validator: Any) -> Result[Any, str]:
    """Validate data; failure becomes Err("Validation failed: <message>")."""
    return _to_result(run_parse(validator, data))


def validate_with(data: object, validator: Any, error_mapper: Callable[[Any], E]) -> Result[Any, E]:
    """Validate data; the raw validator error is passed to error_mapper on failure."""
    require_callable("validate_with", "error_mapper", error_mapper)
    return _to_result_with(run_parse(validator, data), error_mapper)


async def validate_async(data: object, validator: Any) -> Result[Any, str]:
    return _to_result(await run_parse_async(validator, data))


async def validate_with_async(data: object, validator: Any, error_mapper: Callable[[Any], E]) -> Result[Any, E]:
    require_callable("validate_with_async", "error_mapper", error_mapper)
    return _to_result_with(await run_parse_async(validator, data), error_mapper)


# ═════════════════════════════════════════════════════════════════════════════
# JSON
# ═════════════════════════════════════════════════════════════════════════════


def parse_json(text: JsonInput, validator: Any) -> Result[Any, str]:
    """Decode then validate. The validator is not called on malformed JSON."""
    loaded = load_json(text)
    if isinstance(loaded, Err):
        return loaded
    return validate(loaded.value, validator)


async def parse_json_async(text: JsonInput, validator: Any) -> Result[Any, str]:
    loaded = load_json(text)
    if isinstance(loaded, Err):
        return loaded
    return await validate_async(loaded.value, validator)
