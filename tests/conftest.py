"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and marker
registration. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from castor.config import reset_config

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallRecorder:
    """Callback test double that records every invocation.

    Use it wherever a test must prove a callback ran (or never ran), and
    with which argument.
    """

    result: Any = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.result

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def call_count(self) -> int:
        return len(self.calls)


def _explode(*_args: Any) -> Any:
    raise AssertionError("callback should not have been invoked")


@pytest.fixture
def never():
    """Callback that fails the test if it is ever invoked."""
    return _explode


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def make_recorder():
    """Factory for additional recorders within one test."""
    return CallRecorder


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_castor_env(monkeypatch):
    """Clear CASTOR_* env vars and the cached Config around each test."""
    for key in list(os.environ.keys()):
        if key.startswith("CASTOR_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Logging & Markers
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def castor_debug_logging():
    """Let caplog see the library's DEBUG records."""
    logging.getLogger("castor").setLevel(logging.DEBUG)


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Algebraic laws and invariants the containers must uphold",
        "allow_dotenv: Let python-dotenv read .env files",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
