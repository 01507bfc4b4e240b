"""Port for emitting failure diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from benefits_sso.domain.model import Severity


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Fire-and-forget destination for structured failure records."""

    def record(self, message: str, severity: Severity, context: Mapping[str, object]) -> None: ...
