"""Port for detecting identity registry outages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


class OutageMonitorError(RuntimeError):
    """Raised when the outage state of the registry cannot be determined."""


@dataclass(frozen=True, slots=True)
class OutageWindow:
    """A period during which the identity registry is known to be degraded."""

    start_time: datetime | None
    end_time: datetime | None = None

    def is_active(self, at: datetime | None = None) -> bool:
        """Started and not yet ended (at ``at``, when given)."""

        if self.start_time is None:
            return False
        if self.end_time is None:
            return True
        return at is not None and self.end_time > at


@runtime_checkable
class OutageMonitor(Protocol):
    """Report the most recent registry outage, if any.

    Implementations that reach across the network enforce their own latency bound
    and raise ``OutageMonitorError`` instead of blocking.
    """

    def latest_outage(self) -> OutageWindow | None: ...
