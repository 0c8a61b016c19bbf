from __future__ import annotations

import pytest

from castor.errors import (
    CastorError,
    ConfigurationError,
    ContractError,
    EmptyValueError,
    InvariantViolationError,
)

pytestmark = pytest.mark.unit


def test_base_error_carries_hint() -> None:
    err = CastorError("boom", hint="do this")
    assert str(err) == "boom"
    assert err.hint == "do this"


def test_hint_defaults_to_none() -> None:
    assert ContractError("fail").hint is None


@pytest.mark.parametrize(
    "exc_type",
    [ConfigurationError, ContractError, EmptyValueError, InvariantViolationError],
)
def test_all_errors_inherit_from_base(exc_type: type[Exception]) -> None:
    assert issubclass(exc_type, CastorError)


def test_builtin_compatible_bases() -> None:
    """Callers catching builtin categories still see castor errors."""
    assert issubclass(ContractError, TypeError)
    assert issubclass(EmptyValueError, LookupError)
