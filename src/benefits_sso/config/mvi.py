"""Identity registry (MVI) status endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env_var, optional_env_var
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_MVI_STATUS_TIMEOUT_SECONDS = 2.0


@dataclass(frozen=True)
class MviStatusConfig:
    """Where to ask whether the identity registry is currently degraded."""

    status_url: str
    resilience: ResilienceConfig


def get_mvi_status_config(*, resilience: ResilienceConfig | None = None) -> MviStatusConfig | None:
    """Return the status endpoint config, or ``None`` when no endpoint is configured."""

    status_url = optional_env_var("MVI_STATUS_URL")
    if status_url is None:
        return None
    timeout = float_env_var(
        "MVI_STATUS_TIMEOUT_SECONDS",
        default=DEFAULT_MVI_STATUS_TIMEOUT_SECONDS,
    )
    return MviStatusConfig(
        status_url=status_url,
        resilience=resilience
        or ResilienceConfig(
            name="mvi-status",
            timeout_seconds=timeout,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
    )
