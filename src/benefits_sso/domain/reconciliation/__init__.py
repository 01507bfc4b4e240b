"""Reconciliation core for establishing a session from a federated sign-in.

Layered flow:
1) extract identity attributes from a validated assertion (adapter side)
2) resolve and retire any existing sign-in for the principal
3) build a fresh session/user/identity triad, carrying allow-listed ids forward
4) validate each member of the triad independently
5) persist all-or-nothing, or classify and record the failure
"""

from __future__ import annotations

from .classify import FailureClassifier
from .contracts import (
    DEFAULT_ERROR_MESSAGE,
    FAILURE_CODES,
    EntityValidation,
    FailureCategory,
    FailureCode,
    FailureDiagnostic,
    ReconciledSession,
    ReconciliationFailure,
    ReconciliationResult,
    TriadValidation,
)
from .engine import IdentityReconciliation, ReconciliationEngine, reconcile_identity
from .merge import build_triad, build_user, merge_correlation_ids
from .persist import PersistenceError, SessionPersistenceGateway
from .resolve import ExistingIdentityResolver
from .validation import validate_identity, validate_session, validate_triad, validate_user

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "FAILURE_CODES",
    "EntityValidation",
    "ExistingIdentityResolver",
    "FailureCategory",
    "FailureClassifier",
    "FailureCode",
    "FailureDiagnostic",
    "IdentityReconciliation",
    "PersistenceError",
    "ReconciledSession",
    "ReconciliationEngine",
    "ReconciliationFailure",
    "ReconciliationResult",
    "SessionPersistenceGateway",
    "TriadValidation",
    "build_triad",
    "build_user",
    "merge_correlation_ids",
    "reconcile_identity",
    "validate_identity",
    "validate_session",
    "validate_triad",
    "validate_user",
]
