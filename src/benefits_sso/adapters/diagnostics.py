"""Diagnostics sink writing failure records to the standard logging tree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from benefits_sso.domain.model import Severity

if TYPE_CHECKING:
    from collections.abc import Mapping

DIAGNOSTICS_LOGGER: Final[str] = "benefits_sso.diagnostics"

_LEVELS: Final[dict[Severity, int]] = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
}


class LoggingDiagnosticsSink:
    """One log record per failure; the structured context rides in ``extra``."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(DIAGNOSTICS_LOGGER)

    def record(self, message: str, severity: Severity, context: Mapping[str, object]) -> None:
        level = _LEVELS.get(severity, logging.ERROR)
        self.logger.log(level, message, extra={"diagnostic_context": dict(context)})
