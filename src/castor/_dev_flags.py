"""Opt-in runtime checks for castor development.

``CASTOR_VALIDATE=1`` turns on checks too costly or too strict for normal
use. Today that is a single one: ``OptionalResult.flat_map`` verifies that a
present result wraps an iterable, matching its type bound.
"""

from __future__ import annotations

import os

__all__ = ["dev_validate_enabled"]


def dev_validate_enabled(*, override: bool | None = None) -> bool:
    """Report whether ``CASTOR_VALIDATE`` checks should run.

    An explicit ``override`` wins; tests use it to force either setting.
    """
    if override is not None:
        return bool(override)
    return os.getenv("CASTOR_VALIDATE") == "1"
