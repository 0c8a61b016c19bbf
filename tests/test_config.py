"""Configuration boundary tests."""

from __future__ import annotations

import os

import pytest

from castor import Config, ConfigurationError, get_config, reset_config, set_config
from castor._dev_flags import dev_validate_enabled
from castor.config import get_config_or_default

pytestmark = pytest.mark.unit


def test_defaults_without_environment() -> None:
    cfg = Config.from_env()
    assert cfg.chain_cause_default is False


@pytest.mark.parametrize("raw", ["1", "true", "TRUE", " yes ", "on"])
def test_chain_cause_truthy_values(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("CASTOR_CHAIN_CAUSE", raw)
    assert Config.from_env().chain_cause_default is True


def test_invalid_boolean_raises_clear_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CASTOR_CHAIN_CAUSE", "maybe")
    with pytest.raises(ConfigurationError, match="CASTOR_CHAIN_CAUSE") as exc:
        Config.from_env()
    assert exc.value.hint is not None
    assert "true" in exc.value.hint


def test_get_config_is_cached_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_config()
    monkeypatch.setenv("CASTOR_CHAIN_CAUSE", "1")
    assert get_config() is first

    reset_config()

    assert get_config().chain_cause_default is True


def test_set_config_installs_instance() -> None:
    cfg = Config(chain_cause_default=True)
    set_config(cfg)
    assert get_config() is cfg


def test_config_is_frozen() -> None:
    with pytest.raises(AttributeError):
        Config().chain_cause_default = True  # type: ignore[misc]


@pytest.mark.allow_dotenv
def test_from_env_reads_dotenv_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    (tmp_path / ".env").write_text("CASTOR_CHAIN_CAUSE=1\n")
    monkeypatch.chdir(tmp_path)
    try:
        assert Config.from_env(use_dotenv=True).chain_cause_default is True
    finally:
        os.environ.pop("CASTOR_CHAIN_CAUSE", None)


def test_from_env_ignores_dotenv_file_by_default(
    monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    (tmp_path / ".env").write_text("CASTOR_CHAIN_CAUSE=1\n")
    monkeypatch.chdir(tmp_path)
    assert Config.from_env().chain_cause_default is False
    assert "CASTOR_CHAIN_CAUSE" not in os.environ


def test_get_config_or_default_falls_back_on_malformed_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CASTOR_CHAIN_CAUSE", "maybe")
    with pytest.raises(ConfigurationError):
        get_config()
    assert get_config_or_default() == Config()


def test_dev_validate_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    assert dev_validate_enabled() is False
    monkeypatch.setenv("CASTOR_VALIDATE", "1")
    assert dev_validate_enabled() is True
    assert dev_validate_enabled(override=False) is False
