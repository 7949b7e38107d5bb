"""Runtime-schema validation adapter producing Results from untrusted input.

Validators are any objects exposing `safe_parse` / `safe_parse_async`; bare
types are accepted too and validated through pydantic.

Example:
    >>> from pydantic import BaseModel
    >>> class User(BaseModel):
    ...     id: int
    >>> parse_json('{"id": 7}', User).map(lambda u: u.id)
    Ok(7)
"""

from .serialization import (
    NumberError,
    ResultValidator,
    StructuredError,
    dump_result,
    number_error_schema,
    parse_result,
    parse_result_async,
    result_schema,
    split_shape,
    string_error_schema,
    structured_error_schema,
    to_dict,
)
from .validation import (
    load_json,
    parse_json,
    parse_json_async,
    validate,
    validate_async,
    validate_with,
    validate_with_async,
)
from .validators import (
    AsyncValidator,
    Issue,
    ParseOutcome,
    PydanticValidator,
    Refinement,
    SchemaError,
    Validator,
    as_validator,
    validator_for,
)

__all__ = [
    # Validators
    "Validator", "AsyncValidator", "ParseOutcome", "PydanticValidator", "Refinement",
    "Issue", "SchemaError", "validator_for", "as_validator",
    # Validation
    "validate", "validate_with", "validate_async", "validate_with_async",
    "parse_json", "parse_json_async", "load_json",
    # Serialized shape
    "parse_result", "parse_result_async", "split_shape",
    "result_schema", "ResultValidator", "string_error_schema", "number_error_schema",
    "structured_error_schema", "StructuredError", "NumberError",
    "to_dict", "dump_result",
]
