"""Tests for zip_, apply and chain."""

from __future__ import annotations

import pytest

from fallible import Chain, ContractError, Err, Ok, apply, chain, err, ok, zip_


def test_zip_both_ok() -> None:
    """Pairs the values."""
    assert zip_(ok(1), ok("a")) == Ok((1, "a"))


def test_zip_first_operand_priority() -> None:
    """The first Err wins."""
    assert zip_(err("first"), err("second")) == Err("first")
    assert zip_(ok(1), err("second")) == Err("second")
    assert zip_(err("first"), ok(2)) == Err("first")


def test_apply() -> None:
    """Wrapped function applied to wrapped value."""
    assert apply(ok(lambda x: x + 1), ok(41)) == Ok(42)


def test_apply_first_operand_priority() -> None:
    """r_fn is checked before r_value."""
    assert apply(err("fn"), err("value")) == Err("fn")
    assert apply(ok(str), err("value")) == Err("value")


def test_apply_requires_callable_payload() -> None:
    """A non-callable Ok payload is a contract violation."""
    with pytest.raises(ContractError, match="apply: value of r_fn must be callable"):
        apply(ok(3), ok(4))


def test_chain_runs_binds() -> None:
    """then() threads values through and_then."""
    assert chain(ok(2)).then(lambda x: ok(x * 3)).then(lambda x: ok(x + 1)).run() == Ok(7)


def test_chain_short_circuits() -> None:
    """Steps after an Err are skipped."""
    calls: list[int] = []
    result = chain(ok(1)).then(lambda _: err("stop")).then(lambda x: calls.append(x) or ok(x)).run()

    assert result == Err("stop")
    assert calls == []


def test_chain_is_immutable() -> None:
    """then() returns a new builder; the original is unchanged."""
    base = chain(ok(1))
    longer = base.then(lambda x: ok(x + 1))

    assert isinstance(longer, Chain)
    assert base.run() == Ok(1)
    assert longer.run() == Ok(2)
