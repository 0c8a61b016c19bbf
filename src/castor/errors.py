"""Exception hierarchy for castor."""

from __future__ import annotations


class CastorError(Exception):
    """Base exception for all castor errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ContractError(CastorError, TypeError):
    """A required callback or argument is missing or has the wrong shape.

    Raised at the call site, before any callback runs. Subclasses
    ``TypeError`` so callers treating bad arguments generically still catch it.
    """


class InvariantViolationError(CastorError):
    """A container was built in a state its tracker forbids.

    For example a ``FAILED`` outcome without a captured error, or tracking
    state attached to an absent value.
    """


class EmptyValueError(CastorError, LookupError):
    """A value was demanded from an empty container."""


class ConfigurationError(CastorError):
    """Configuration validation or resolution failed."""
