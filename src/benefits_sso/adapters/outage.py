"""Outage monitors for the identity registry (MVI)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from benefits_sso.adapters.http_resilience import ResilientClient
from benefits_sso.domain.model import utcnow
from benefits_sso.domain.ports import OutageMonitorError, OutageWindow

if TYPE_CHECKING:
    from collections.abc import Callable

    from benefits_sso.config import MviStatusConfig
    from benefits_sso.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


@dataclass(slots=True)
class OutageTracker:
    """In-process record of registry outages, fed by whoever observes them."""

    clock: Callable[[], datetime] = field(default=utcnow)
    _latest: OutageWindow | None = field(default=None, init=False)

    def begin(self, at: datetime | None = None) -> OutageWindow:
        """Open a new outage unless one is already open."""

        if self._latest is not None and self._latest.is_active(self.clock()):
            return self._latest
        self._latest = OutageWindow(start_time=at or self.clock())
        log.warning("Identity registry outage started at %s", self._latest.start_time)
        return self._latest

    def end(self, at: datetime | None = None) -> OutageWindow | None:
        """Close the open outage, if any."""

        current = self._latest
        if current is None or current.end_time is not None:
            return current
        self._latest = OutageWindow(start_time=current.start_time, end_time=at or self.clock())
        log.info("Identity registry outage ended at %s", self._latest.end_time)
        return self._latest

    def latest_outage(self) -> OutageWindow | None:
        return self._latest


class OutageStatusWindow(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    start_time: datetime | None = None
    end_time: datetime | None = None


class OutageStatusPayload(BaseModel):
    """Body of the registry status endpoint: ``{"latest_outage": {...} | null}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    latest_outage: OutageStatusWindow | None = None


class HttpOutageMonitor:
    """Ask the registry status endpoint for its most recent outage."""

    def __init__(
        self,
        *,
        config: MviStatusConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    def latest_outage(self) -> OutageWindow | None:
        if _in_running_loop():
            raise OutageMonitorError(
                "Registry status cannot be queried synchronously from a running event loop"
            )
        return asyncio.run(self._latest_outage_async())

    async def _latest_outage_async(self) -> OutageWindow | None:
        try:
            async with self._client_factory(self._config.resilience) as client:
                response = await client.get(self._config.status_url)
            response.raise_for_status()
            payload = OutageStatusPayload.model_validate_json(response.content)
        except httpx.HTTPError as exc:
            raise OutageMonitorError(f"Registry status request failed: {exc}") from exc
        except ValidationError as exc:
            raise OutageMonitorError("Registry status payload was malformed") from exc

        window = payload.latest_outage
        if window is None:
            return None
        return OutageWindow(start_time=window.start_time, end_time=window.end_time)


def _in_running_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
