"""Shared logging helpers for benefits_sso."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_log_level() -> int:
    """Resolve ``BENEFITS_SSO_LOG_LEVEL`` to a numeric level (default INFO)."""

    name = optional_env_var("BENEFITS_SSO_LOG_LEVEL")
    if name is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {name}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``BENEFITS_SSO_LOG_LEVEL`` (or INFO) and the format is terse enough
    for CLI output. Pass ``force=True`` to reconfigure during tests or specialised
    entry points.
    """

    logging.basicConfig(
        level=get_log_level() if level is None else level,
        format=DEFAULT_LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
