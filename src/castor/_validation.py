"""Internal validation helpers shared by the container modules.

These helpers centralize argument checks so contract violations surface at
the call site with consistent messages, before any callback runs.
"""

from __future__ import annotations

import typing

from castor.errors import ContractError


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ContractError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            enhanced_message = f"{field_name}: {message}"
            raise exc(enhanced_message)
        raise exc(message)


def _require_callable(func: typing.Any, field_name: str) -> None:
    _require(
        condition=callable(func),
        message=f"must be callable, got {type(func).__name__}",
        field_name=field_name,
    )


def _require_type_descriptor(cls: typing.Any, field_name: str = "cls") -> None:
    """Validate ``cls`` is something ``isinstance`` accepts as its second argument."""
    ok = isinstance(cls, type) or (
        isinstance(cls, tuple) and all(isinstance(c, type) for c in cls)
    )
    _require(
        condition=ok,
        message=f"must be a class or tuple of classes, got {cls!r}",
        field_name=field_name,
    )


def _callable_name(func: typing.Any) -> str:
    return getattr(func, "__qualname__", None) or type(func).__name__
