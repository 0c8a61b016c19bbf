"""castor: composable optional values, deferred failures and two-way unions.

Public API:
    - OptionalResult: optional value with a fallible-call tracker
    - Outcome: UNSET / SUCCEEDED / FAILED tracker states
    - Either, First, Second: two-variant union
    - Config: library-wide settings resolved from ``CASTOR_*`` variables
"""

from __future__ import annotations

import logging

from castor.config import Config, get_config, reset_config, set_config
from castor.either import Either, First, Second
from castor.errors import (
    CastorError,
    ConfigurationError,
    ContractError,
    EmptyValueError,
    InvariantViolationError,
)
from castor.option import OptionalResult, Outcome

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("castor-fp")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("castor").addHandler(logging.NullHandler())

__all__ = [
    "CastorError",
    "Config",
    "ConfigurationError",
    "ContractError",
    "Either",
    "EmptyValueError",
    "First",
    "InvariantViolationError",
    "OptionalResult",
    "Outcome",
    "Second",
    "get_config",
    "reset_config",
    "set_config",
]
