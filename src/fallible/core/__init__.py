"""Result type, boundary adapters and argument contracts."""

from .handle import UNKNOWN_ERROR, handle, handle_async, handle_with, handle_with_async
from .result import (
    ERR,
    OK,
    Err,
    Ok,
    Result,
    err,
    is_err,
    is_ok,
    is_result,
    match,
    ok,
    unwrap,
    unwrap_or,
)

__all__ = [
    # Variants
    "Ok", "Err", "Result", "OK", "ERR",
    # Constructors / predicates
    "ok", "err", "is_ok", "is_err", "is_result",
    # Extraction
    "unwrap", "unwrap_or", "match",
    # Boundary adapters
    "handle", "handle_async", "handle_with", "handle_with_async", "UNKNOWN_ERROR",
]
