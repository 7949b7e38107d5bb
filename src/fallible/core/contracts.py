"""Argument checks shared by the combinators.

Misuse is reported with ContractError at the call site instead of surfacing
later as an obscure AttributeError deep inside a chain. The checks can be
switched off with FALLIBLE_CHECK_CONTRACTS=false; `force=True` ignores that
switch for checks that guard against silent corruption.
"""

from __future__ import annotations

from ..config import get_settings
from ..errors import ContractError
from .result import Err, Ok


def enabled() -> bool:
    return get_settings().check_contracts


def require_callable(func_name: str, param: str, value: object, *, force: bool = False) -> None:
    if (force or enabled()) and not callable(value):
        raise ContractError.not_callable(func_name, param, value)


def require_result(func_name: str, param: str, value: object, *, force: bool = False) -> None:
    if (force or enabled()) and not isinstance(value, (Ok, Err)):
        raise ContractError.not_result(func_name, param, value)
