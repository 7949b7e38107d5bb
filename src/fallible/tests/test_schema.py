"""Tests for the validation adapter and the serialized Result shape."""

from __future__ import annotations

import asyncio
from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from fallible import (
    ContractError,
    Err,
    Ok,
    ParseOutcome,
    PydanticValidator,
    SchemaError,
    StructuredError,
    dump_result,
    err,
    number_error_schema,
    ok,
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
from fallible.schema import as_validator


class User(BaseModel):
    id: int
    name: str


class SpyValidator:
    """Hand-written validator recording its calls."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    def safe_parse(self, data: object) -> ParseOutcome[object]:
        self.calls.append(data)
        if data == "good":
            return ParseOutcome.passed("GOOD")
        return ParseOutcome.failed(SchemaError.single("not good"))


class AsyncOnlyValidator:
    async def safe_parse_async(self, data: object) -> ParseOutcome[object]:
        await asyncio.sleep(0)
        return ParseOutcome.passed(data) if data else ParseOutcome.failed(SchemaError.single("empty"))


# ═════════════════════════════════════════════════════════════════════════════
# Validators
# ═════════════════════════════════════════════════════════════════════════════


def test_pydantic_validator_success() -> None:
    """Models are built from dicts."""
    outcome = PydanticValidator(User).safe_parse({"id": 1, "name": "ada"})
    assert outcome.success
    assert outcome.data == User(id=1, name="ada")


def test_schema_error_locations() -> None:
    """Issues carry their path and the message joins them."""
    outcome = PydanticValidator(User).safe_parse({"id": "x"})
    assert not outcome.success
    paths = {issue.path for issue in outcome.error.issues}
    assert paths == {("id",), ("name",)}
    assert "id: " in outcome.error.message
    assert "name: Field required" in outcome.error.message


def test_refine_sync() -> None:
    """Refinements run after type validation; strings are custom messages."""
    v = (
        PydanticValidator(int)
        .refine(lambda n: n > 0, "must be positive")
        .refine(lambda n: n % 2 == 0 or "must be even")
    )
    assert v.safe_parse(4).data == 4
    assert v.safe_parse(-2).error.message == "must be positive"
    assert v.safe_parse(3).error.message == "must be even"


def test_refine_returns_new_validator() -> None:
    """The receiver is unchanged."""
    base = PydanticValidator(int)
    base.refine(lambda n: n > 100)
    assert base.safe_parse(1).success


def test_async_refinement_requires_async_parse() -> None:
    """Sync parsing rejects async refinements."""
    async def positive(n: int) -> bool:
        return n > 0

    v = PydanticValidator(int).refine(positive)
    with pytest.raises(ContractError, match="safe_parse_async"):
        v.safe_parse(1)


@pytest.mark.asyncio
async def test_async_refinement() -> None:
    """safe_parse_async awaits refinements."""
    async def positive(n: int) -> bool:
        await asyncio.sleep(0)
        return n > 0

    v = PydanticValidator(int).refine(positive, "must be positive")
    assert (await v.safe_parse_async(5)).data == 5
    assert (await v.safe_parse_async(-5)).error.message == "must be positive"


def test_validator_for_caches() -> None:
    """One validator per hashable type."""
    assert validator_for(User) is validator_for(User)


# ═════════════════════════════════════════════════════════════════════════════
# validate / validate_with
# ═════════════════════════════════════════════════════════════════════════════


def test_validate_accepts_bare_types() -> None:
    """Types are wrapped automatically."""
    assert validate({"id": 1, "name": "ada"}, User) == Ok(User(id=1, name="ada"))
    assert validate(5, int) == Ok(5)


def test_bare_types_are_strict() -> None:
    """Bare types check rather than coerce; explicit lax validators still coerce."""
    assert validate("5", int).is_err()
    assert validate("5", PydanticValidator(int)) == Ok(5)
    assert validator_for(int).strict


def test_validate_failure_message() -> None:
    """Failure is prefixed with "Validation failed: "."""
    result = validate({"id": 1}, User)
    assert result.is_err()
    assert result.unwrap_err() == "Validation failed: name: Field required"


def test_validate_with_custom_validator() -> None:
    """Any object with safe_parse works."""
    spy = SpyValidator()
    assert validate("good", spy) == ok("GOOD")
    assert validate("bad", spy) == err("Validation failed: not good")


def test_validate_with_maps_raw_error() -> None:
    """error_mapper receives the validator's error object."""
    result = validate_with({"id": "x", "name": "ada"}, User, lambda e: [i.path for i in e.issues])
    assert result == Err([("id",)])


def test_annotated_constraints() -> None:
    """Annotated constraints are honoured."""
    Port = Annotated[int, Field(ge=1, le=65535)]
    assert validate(8080, Port) == Ok(8080)
    assert validate(0, Port).is_err()


def test_async_only_validator_in_sync_path() -> None:
    """Sync validation needs safe_parse."""
    with pytest.raises(ContractError, match="async"):
        validate("x", AsyncOnlyValidator())


@pytest.mark.asyncio
async def test_validate_async_prefers_async_parse() -> None:
    """safe_parse_async is used when present."""
    assert await validate_async("x", AsyncOnlyValidator()) == Ok("x")
    assert await validate_async("", AsyncOnlyValidator()) == Err("Validation failed: empty")


@pytest.mark.asyncio
async def test_validate_async_falls_back_to_sync() -> None:
    """Validators without safe_parse_async still work."""
    assert await validate_async("good", SpyValidator()) == Ok("GOOD")
    assert await validate_with_async("bad", SpyValidator(), lambda e: e.message) == Err("not good")


# ═════════════════════════════════════════════════════════════════════════════
# parse_json
# ═════════════════════════════════════════════════════════════════════════════


def test_parse_json_success() -> None:
    """Decoded then validated."""
    assert parse_json('{"id": 7, "name": "bo"}', User) == Ok(User(id=7, name="bo"))


def test_parse_json_malformed_skips_validator() -> None:
    """Malformed JSON never reaches the validator."""
    spy = SpyValidator()
    result = parse_json("{oops", spy)

    assert result.is_err()
    assert result.unwrap_err().startswith("Invalid JSON: ")
    assert spy.calls == []


def test_parse_json_validation_failure() -> None:
    """Well-formed but invalid data is a validation failure."""
    assert parse_json('"bad"', SpyValidator()) == Err("Validation failed: not good")


@pytest.mark.asyncio
async def test_parse_json_async() -> None:
    """Async sibling."""
    assert await parse_json_async(b'"x"', AsyncOnlyValidator()) == Ok("x")
    assert (await parse_json_async("[1,", AsyncOnlyValidator())).unwrap_err().startswith("Invalid JSON: ")


# ═════════════════════════════════════════════════════════════════════════════
# Serialized Result Shape
# ═════════════════════════════════════════════════════════════════════════════


def test_parse_result_ok() -> None:
    """A valid Ok envelope decodes to Ok(Ok(value))."""
    assert parse_result('{"type":"Ok","value":{"id":1,"name":"x"}}', User, str) == Ok(Ok(User(id=1, name="x")))


def test_parse_result_err() -> None:
    """A valid Err envelope decodes to Ok(Err(error))."""
    assert parse_result('{"type":"Err","error":"nope"}', User, str) == Ok(Err("nope"))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ('{"value": 1}', "Invalid Result structure: missing 'type' field"),
        ("[1, 2]", "Invalid Result structure: missing 'type' field"),
        ('{"type": "Ok"}', "Invalid Ok Result: missing 'value' field"),
        ('{"type": "Err", "value": 1}', "Invalid Err Result: missing 'error' field"),
        ('{"type": "Maybe"}', "Invalid Result type: expected 'Ok' or 'Err', got 'Maybe'"),
    ],
)
def test_parse_result_shape_errors(text: str, message: str) -> None:
    """Each structural problem has a distinct message."""
    assert parse_result(text, int, str) == Err(message)


def test_parse_result_does_not_coerce_payloads() -> None:
    """A numeric string is not a number in a serialized payload."""
    result = parse_result('{"type":"Ok","value":"5"}', int, str)

    assert result.is_err()
    assert result.unwrap_err().startswith("Invalid Ok value: ")
    assert parse_result('{"type":"Err","error":"404"}', int, int).unwrap_err().startswith("Invalid Err value: ")


def test_parse_result_unknown_tag_rendered_as_json() -> None:
    """Non-string tags appear in the message the way they were sent."""
    assert parse_result('{"type": null}', int, str) == Err("Invalid Result type: expected 'Ok' or 'Err', got 'null'")
    assert parse_result('{"type": true}', int, str) == Err("Invalid Result type: expected 'Ok' or 'Err', got 'true'")


def test_as_validator_recognises_protocols() -> None:
    """Objects implementing either protocol are used as-is; types are wrapped."""
    spy, async_only = SpyValidator(), AsyncOnlyValidator()

    assert as_validator(spy) is spy
    assert as_validator(async_only) is async_only
    assert isinstance(as_validator(User), PydanticValidator)


def test_parse_result_payload_errors() -> None:
    """Payload validation failures name the variant."""
    bad_ok = parse_result('{"type":"Ok","value":"x"}', SpyValidator(), str)
    bad_err = parse_result('{"type":"Err","error":"x"}', int, SpyValidator())

    assert bad_ok == Err("Invalid Ok value: not good")
    assert bad_err == Err("Invalid Err value: not good")


def test_parse_result_malformed_json() -> None:
    """Malformed JSON is reported before any shape check."""
    assert parse_result("{", int, str).unwrap_err().startswith("Invalid JSON: ")


@pytest.mark.asyncio
async def test_parse_result_async() -> None:
    """Async sibling uses async validators."""
    assert await parse_result_async('{"type":"Ok","value":"v"}', AsyncOnlyValidator(), str) == Ok(Ok("v"))
    assert await parse_result_async('{"type":"Ok","value":""}', AsyncOnlyValidator(), str) == Err(
        "Invalid Ok value: empty"
    )


def test_result_schema_validator() -> None:
    """result_schema validates envelopes into Results."""
    schema = result_schema(int, str)

    assert schema.safe_parse({"type": "Ok", "value": 3}).data == Ok(3)
    assert schema.safe_parse({"type": "Err", "error": "e"}).data == Err("e")

    failed = schema.safe_parse({"type": "Ok", "value": "not a number"})
    assert not failed.success
    assert failed.error.issues[0].path == ("value",)
    assert not schema.safe_parse({"type": "Nope"}).success


def test_result_schema_usable_as_validator() -> None:
    """Shape schemas plug into validate()."""
    assert validate({"type": "Err", "error": 404}, number_error_schema(int)) == Ok(Err(404))
    assert validate({"type": "Err", "error": 404}, string_error_schema(int)).is_err()


def test_structured_error_schema() -> None:
    """Structured errors carry a message and an optional code."""
    schema = structured_error_schema(int)

    parsed = schema.safe_parse({"type": "Err", "error": {"message": "gone", "code": 410}})
    assert parsed.data == Err(StructuredError(message="gone", code=410))
    assert schema.safe_parse({"type": "Err", "error": {"message": "gone"}}).data == Err(StructuredError(message="gone"))
    assert not schema.safe_parse({"type": "Err", "error": {"code": 1}}).success


def test_to_dict_and_dump_result() -> None:
    """Dumping produces the serialized shape."""
    assert to_dict(ok(1)) == {"type": "Ok", "value": 1}
    assert to_dict(err(ValueError("bad"))) == {"type": "Err", "error": "bad"}
    assert to_dict(ok(User(id=1, name="a"))) == {"type": "Ok", "value": {"id": 1, "name": "a"}}
    assert dump_result(err("not found")) == '{"type":"Err","error":"not found"}'
    assert dump_result(ok([User(id=2, name="b")])) == '{"type":"Ok","value":[{"id":2,"name":"b"}]}'


def test_dump_then_parse() -> None:
    """A dumped Result parses back to an equal Result."""
    original = err(StructuredError(message="gone", code=410))
    assert parse_result(dump_result(original), int, StructuredError) == Ok(original)
