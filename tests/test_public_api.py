from __future__ import annotations

import logging

import pytest

import castor

pytestmark = pytest.mark.unit


def test_public_exports_resolve() -> None:
    for name in castor.__all__:
        assert getattr(castor, name) is not None


def test_containers_are_classes() -> None:
    assert callable(castor.OptionalResult)
    assert issubclass(castor.First, castor.Either)
    assert issubclass(castor.Second, castor.Either)


def test_library_logger_has_null_handler() -> None:
    handlers = logging.getLogger("castor").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_version_is_a_string() -> None:
    assert isinstance(castor.__version__, str)
