"""Outage-aware classification of failed reconciliations.

Categories are checked in a fixed priority order:
1) assertion-level errors
2) an active identity registry (MVI) outage
3) triad validation failure

Classification emits exactly one diagnostic record and never raises.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from benefits_sso.domain.model import utcnow
from benefits_sso.domain.ports import OutageMonitorError

from .contracts import FAILURE_CODES, FailureCategory, FailureDiagnostic

if TYPE_CHECKING:
    from datetime import datetime

    from benefits_sso.domain.ports import (
        AssertionFailure,
        DiagnosticsSink,
        OutageMonitor,
        OutageWindow,
    )

    from .contracts import ReconciliationFailure

log = getLogger(__name__)

MESSAGE_PREFIX = "Login Fail! "
MULTIPLE_ERRORS_SUFFIX = " Multiple SAML Errors"


@dataclass(slots=True)
class FailureClassifier:
    outage_monitor: OutageMonitor
    sink: DiagnosticsSink
    clock: Callable[[], datetime] = field(default=utcnow)

    def classify(self, failure: ReconciliationFailure) -> FailureDiagnostic:
        """Classify ``failure`` and record the resulting diagnostic."""

        diagnostic = self.diagnose(failure)
        self._emit(diagnostic)
        return diagnostic

    def diagnose(self, failure: ReconciliationFailure) -> FailureDiagnostic:
        """Classify ``failure`` without recording anything."""

        if failure.assertion_errors:
            return _assertion_diagnostic(failure.assertion_errors)

        outage, monitor_unavailable = self._latest_outage()
        if outage is not None and outage.is_active(self.clock()):
            return _outage_diagnostic(outage)
        return _validation_diagnostic(failure, monitor_unavailable=monitor_unavailable)

    def _latest_outage(self) -> tuple[OutageWindow | None, bool]:
        try:
            return self.outage_monitor.latest_outage(), False
        except OutageMonitorError:
            log.warning("Outage monitor unavailable; classifying without outage state")
            return None, True
        except Exception:  # noqa: BLE001
            log.exception("Outage monitor failed unexpectedly; classifying without outage state")
            return None, True

    def _emit(self, diagnostic: FailureDiagnostic) -> None:
        try:
            self.sink.record(diagnostic.message, diagnostic.severity, diagnostic.context)
        except Exception:  # noqa: BLE001
            log.exception("Diagnostics sink failed to record %s", diagnostic.instrumentation_tag)


def _assertion_diagnostic(errors: tuple[AssertionFailure, ...]) -> FailureDiagnostic:
    first = errors[0]
    message = MESSAGE_PREFIX + first.short_message
    if len(errors) > 1:
        message += MULTIPLE_ERRORS_SUFFIX
    return FailureDiagnostic(
        category=FailureCategory.ASSERTION_INVALID,
        code=first.code,
        tag=first.tag,
        severity=first.severity,
        message=message,
        context={
            "errors": [error.as_context() for error in errors],
            "multiple_errors": len(errors) > 1,
        },
    )


def _outage_diagnostic(outage: OutageWindow) -> FailureDiagnostic:
    failure_code = FAILURE_CODES[FailureCategory.REGISTRY_OUTAGE]
    started = outage.start_time.isoformat() if outage.start_time else None
    return FailureDiagnostic(
        category=FailureCategory.REGISTRY_OUTAGE,
        code=failure_code.code,
        tag=failure_code.tag,
        severity=failure_code.severity,
        message=MESSAGE_PREFIX + failure_code.short_message,
        context={
            "outage_started_at": started,
            "detail": f"MVI has been unavailable since {started}",
        },
        outage=outage,
    )


def _validation_diagnostic(
    failure: ReconciliationFailure,
    *,
    monitor_unavailable: bool,
) -> FailureDiagnostic:
    failure_code = FAILURE_CODES[FailureCategory.VALIDATION_FAILED]
    triad = failure.triad
    validation = failure.validation
    if triad is None or validation is None:
        raise ValueError("Validation failures must carry the triad and its validation")
    identity = triad.identity
    context: dict[str, object] = {
        "uuid": triad.principal_id,
        "session": validation.session.as_context(),
        "user": validation.user.as_context(),
        "identity": {
            **validation.identity.as_context(),
            "authn_context": identity.authn_context,
            "loa": identity.loa,
        },
    }
    if monitor_unavailable:
        context["outage_monitor_unavailable"] = True
    return FailureDiagnostic(
        category=FailureCategory.VALIDATION_FAILED,
        code=failure_code.code,
        tag=failure_code.tag,
        severity=failure_code.severity,
        message=MESSAGE_PREFIX + failure_code.short_message,
        context=context,
    )
