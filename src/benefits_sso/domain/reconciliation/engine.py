"""Orchestrator for sign-in reconciliation.

The engine composes ports but does not prescribe concrete adapters, so the same
core serves the SQLAlchemy-backed application and in-memory test doubles.

Flow for one inbound assertion:
1) validate the assertion and extract identity attributes
2) look up an existing sign-in for the principal and retire it if found
3) stop with a classified failure if the assertion itself was rejected
4) build and validate a fresh session/user/identity triad
5) persist the triad all-or-nothing, or classify the validation failure
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from benefits_sso.domain.model import utcnow

from .contracts import ReconciliationFailure, ReconciliationResult
from .merge import build_triad
from .validation import validate_triad

if TYPE_CHECKING:
    from datetime import datetime

    from benefits_sso.domain.model import ExistingIdentity, IdentityAttributes
    from benefits_sso.domain.ports import (
        AssertionValidator,
        ExistingIdentityLookup,
        IdentityRetirement,
    )

    from .classify import FailureClassifier
    from .contracts import ReconciledSession, TriadValidation
    from .persist import SessionPersistenceGateway

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IdentityReconciliation:
    """A built triad and its validation report."""

    triad: ReconciledSession
    validation: TriadValidation

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid


def reconcile_identity(
    attributes: IdentityAttributes,
    *,
    existing: ExistingIdentity | None,
    multifactor_change_detected: bool,
    now: datetime,
) -> IdentityReconciliation:
    """Build a fresh triad for ``attributes`` and validate each member."""

    triad = build_triad(
        attributes,
        existing=existing,
        multifactor_change_detected=multifactor_change_detected,
        now=now,
    )
    return IdentityReconciliation(triad=triad, validation=validate_triad(triad))


@dataclass(slots=True)
class ReconciliationEngine:
    """Run full reconciliation from raw assertion to persisted session."""

    validate_assertion: AssertionValidator
    lookup: ExistingIdentityLookup
    retirement: IdentityRetirement
    classifier: FailureClassifier
    gateway: SessionPersistenceGateway
    clock: Callable[[], datetime] = field(default=utcnow)

    def reconcile(self, assertion: object) -> ReconciliationResult:
        """Reconcile ``assertion``; raises only for caller bugs and storage errors."""

        validation = self.validate_assertion(assertion)
        attributes = validation.attributes

        existing = self.lookup.find(attributes.principal_id) if attributes is not None else None
        if existing is not None:
            self._retire(existing)

        if not validation.is_valid:
            failure = ReconciliationFailure(
                assertion_errors=validation.errors,
                attributes=attributes,
            )
            return self._fail(failure, is_new_login=existing is not None)

        if attributes is None:  # pragma: no cover - guarded by AssertionValidation
            raise RuntimeError("Valid assertion produced no attributes")

        outcome = reconcile_identity(
            attributes,
            existing=existing,
            multifactor_change_detected=attributes.changing_multifactor and existing is not None,
            now=self.clock(),
        )
        if not outcome.is_valid:
            log.info(
                "Sign-in triad invalid for principal %s: %s",
                attributes.principal_id,
                ", ".join(outcome.validation.invalid_entities),
            )
            failure = ReconciliationFailure(
                attributes=attributes,
                triad=outcome.triad,
                validation=outcome.validation,
            )
            return self._fail(failure, is_new_login=outcome.triad.is_new_login)

        triad = outcome.triad
        if triad.carried_attributes:
            log.info(
                "Carried %s forward for principal %s",
                ", ".join(triad.carried_attributes),
                triad.principal_id,
            )
        self.gateway.persist(triad)
        return ReconciliationResult(
            success=True,
            session=triad.session,
            is_new_login=triad.is_new_login,
        )

    def _retire(self, existing: ExistingIdentity) -> None:
        if not self.retirement.retire(existing):
            log.warning("Existing sign-in for %s was already gone", existing.principal_id)

    def _fail(self, failure: ReconciliationFailure, *, is_new_login: bool) -> ReconciliationResult:
        diagnostic = self.classifier.classify(failure)
        return ReconciliationResult(
            success=False,
            is_new_login=is_new_login,
            diagnostic=diagnostic,
        )
