"""Exceptions raised by fallible itself.

Business failures travel as Err values and never show up here. These are
the two ways the library talks through the exception channel instead:

- UnwrapError: an Err was unwrapped at a program boundary
- ContractError: a combinator was called with the wrong kind of argument
"""

from __future__ import annotations

from typing import Self

import orjson


class UnwrapError(RuntimeError):
    """Raised when unwrapping the wrong variant of a Result.

    The original Err payload stays available on `payload` so upstream
    logging or retry code can inspect it.

    Example:
        >>> try:
        ...     Err({"code": 404}).unwrap()
        ... except UnwrapError as e:
        ...     e.payload
        {'code': 404}
    """

    __slots__ = ("payload",)

    def __init__(self, message: str, payload: object = None) -> None:
        self.payload = payload
        super().__init__(message)

    @classmethod
    def from_payload(cls, payload: object, *, limit: int = 500) -> Self:
        """Build the error for an Err payload that is not itself an exception."""
        if isinstance(payload, str):
            return cls(payload, payload)
        return cls(f"Unwrap failed: {describe_payload(payload, limit=limit)}", payload)


class ContractError(TypeError):
    """Raised when a combinator is misused (wrong argument kind, not a Result, not callable)."""

    __slots__ = ()

    @classmethod
    def not_callable(cls, func_name: str, param: str, value: object) -> Self:
        return cls(f"{func_name}: {param} must be callable, got {type(value).__name__}")

    @classmethod
    def not_result(cls, func_name: str, param: str, value: object) -> Self:
        return cls(f"{func_name}: {param} must be an Ok or Err, got {type(value).__name__}")


def describe_payload(payload: object, *, limit: int = 500) -> str:
    """Serialize an arbitrary payload for a human-readable message.

    Structures are rendered as JSON; anything orjson cannot encode falls back to repr().
    """
    try:
        text = orjson.dumps(payload, default=repr, option=orjson.OPT_NON_STR_KEYS).decode()
    except (orjson.JSONEncodeError, TypeError):
        text = repr(payload)
    return text if len(text) <= limit else f"{text[:limit]}..."
