"""fallible: explicit success/failure values for Python.

A Result is either Ok(value) or Err(error). Functions return failures as
values instead of raising, and the combinators here compose them:

- core: Ok / Err, handle() boundary adapters, unwrap()
- transform: map, map_err, and_then, pipe (+ async siblings)
- batch: all_, partition, analyze, find_first, reduce, first, ...
- patterns: safe() do-notation, zip_, apply, chain
- schema: validate untrusted input, parse serialized Results
- utils: tap, inspect, from_nullable, to_nullable

Example:
    >>> from fallible import Ok, Err, handle, pipe
    >>> def parse(s: str):
    ...     return handle(lambda: int(s))
    >>> pipe(parse("20"), lambda n: Ok(n + 1) if n < 100 else Err("too big"))
    Ok(21)

Configuration is read from FALLIBLE_* environment variables, see fallible.config.
"""

import logging

from .batch import (
    BatchStats,
    FirstFound,
    Partition,
    PartitionStats,
    all_,
    all_async,
    all_settled_async,
    analyze,
    collect_results,
    errs,
    find_first,
    first,
    oks,
    partition,
    partition_with,
    reduce,
    traverse,
)
from .config import FallibleSettings, clear_settings_cache, get_settings
from .core import (
    ERR,
    OK,
    Err,
    Ok,
    Result,
    err,
    handle,
    handle_async,
    handle_with,
    handle_with_async,
    is_err,
    is_ok,
    is_result,
    match,
    ok,
    unwrap,
    unwrap_or,
)
from .errors import ContractError, UnwrapError
from .patterns import Chain, apply, chain, safe, safe_async, zip_
from .schema import (
    ParseOutcome,
    PydanticValidator,
    SchemaError,
    StructuredError,
    Validator,
    dump_result,
    number_error_schema,
    parse_json,
    parse_json_async,
    parse_result,
    parse_result_async,
    result_schema,
    string_error_schema,
    structured_error_schema,
    to_dict,
    validate,
    validate_async,
    validate_with,
    validate_with_async,
    validator_for,
)
from .transform import and_then, and_then_async, map, map_async, map_err, map_err_async, pipe
from .utils import from_nullable, inspect, tap, tap_err, to_nullable

logging.getLogger("fallible").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core
    "Ok", "Err", "Result", "OK", "ERR",
    "ok", "err", "is_ok", "is_err", "is_result", "unwrap", "unwrap_or", "match",
    "handle", "handle_async", "handle_with", "handle_with_async",
    # Transform
    "map", "map_err", "and_then", "map_async", "map_err_async", "and_then_async", "pipe",
    # Batch
    "all_", "all_async", "all_settled_async", "oks", "errs", "partition", "partition_with",
    "analyze", "find_first", "reduce", "first", "traverse", "collect_results",
    "Partition", "PartitionStats", "BatchStats", "FirstFound",
    # Patterns
    "safe", "safe_async", "zip_", "apply", "chain", "Chain",
    # Schema
    "validate", "validate_with", "validate_async", "validate_with_async",
    "parse_json", "parse_json_async", "parse_result", "parse_result_async",
    "result_schema", "string_error_schema", "number_error_schema", "structured_error_schema",
    "to_dict", "dump_result", "validator_for",
    "Validator", "ParseOutcome", "PydanticValidator", "SchemaError", "StructuredError",
    # Utils
    "inspect", "tap", "tap_err", "from_nullable", "to_nullable",
    # Errors / config
    "UnwrapError", "ContractError",
    "FallibleSettings", "get_settings", "clear_settings_cache",
]
