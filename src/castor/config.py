"""Configuration: frozen Config resolved from ``CASTOR_*`` environment variables."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

import dotenv

from castor.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})

_current: Config | None = None


def _parse_bool(name: str, raw: str | None, *, default: bool) -> bool:
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean, got {raw!r}",
        hint=f"Use one of: {', '.join(sorted(_TRUE | (_FALSE - {''})))}",
    )
@dataclass(frozen=True)
class Config:
    """Immutable library-wide settings.

    The only setting picks the default for ``on_failure``'s ``chain_cause``;
    it never changes which branch a container takes. Diagnostics are
    controlled through the ``castor`` logger level instead.

    Example:
        # CASTOR_CHAIN_CAUSE=1 in a .env file
        set_config(Config.from_env(use_dotenv=True))
        assert get_config().chain_cause_default is True
    """

    #: Default for ``OptionalResult.on_failure(chain_cause=None)``.
    chain_cause_default: bool = False

    @classmethod
    def from_env(cls, *, use_dotenv: bool = False) -> Config:
        """Build a Config from ``CASTOR_CHAIN_CAUSE``.

        Args:
            use_dotenv: Also load a ``.env`` file found from the working
                directory. Off by default so lookups never touch the
                filesystem.

        Raises:
            ConfigurationError: A ``CASTOR_*`` value is not a boolean.
        """
        if use_dotenv:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
        return cls(
            chain_cause_default=_parse_bool(
                "CASTOR_CHAIN_CAUSE", os.getenv("CASTOR_CHAIN_CAUSE"), default=False
            ),
        )


def get_config() -> Config:
    """Return the process-wide Config, resolving it from the environment on first use."""
    global _current
    if _current is None:
        _current = Config.from_env()
    return _current


def get_config_or_default() -> Config:
    """Like :func:`get_config`, but fall back to defaults on a malformed environment.

    Container operations use this so a bad ``CASTOR_*`` value can never
    replace the exception a caller asked for.
    """
    try:
        return get_config()
    except ConfigurationError as exc:
        logger.debug("Ignoring invalid castor configuration: %s", exc)
        return Config()


def set_config(config: Config) -> None:
    """Install ``config`` as the process-wide Config."""
    global _current
    _current = config


def reset_config() -> None:
    """Forget the cached Config so the next lookup re-reads the environment."""
    global _current
    _current = None
