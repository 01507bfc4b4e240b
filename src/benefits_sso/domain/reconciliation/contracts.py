"""Shared reconciliation contract components.

This module holds only:
- the reconciled triad and its validation report
- the failure taxonomy with its stable codes
- the result handed back to the request-handling layer
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from benefits_sso.domain.model import Severity

if TYPE_CHECKING:
    from benefits_sso.domain.model import IdentityAttributes, Session, User, UserIdentity
    from benefits_sso.domain.ports import AssertionFailure, OutageWindow


@dataclass(slots=True, kw_only=True)
class ReconciledSession:
    """Freshly built session/user/identity triad for one sign-in."""

    session: Session
    user: User
    identity: UserIdentity
    is_new_login: bool = False
    carried_attributes: tuple[str, ...] = ()

    @property
    def principal_id(self) -> str:
        return self.identity.principal_id


@dataclass(frozen=True, slots=True)
class EntityValidation:
    """Validation outcome for one member of the triad."""

    errors: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def as_context(self) -> dict[str, object]:
        return {"valid": self.valid, "errors": list(self.errors)}


@dataclass(frozen=True, slots=True, kw_only=True)
class TriadValidation:
    session: EntityValidation
    user: EntityValidation
    identity: EntityValidation

    @property
    def is_valid(self) -> bool:
        return self.session.valid and self.user.valid and self.identity.valid

    @property
    def invalid_entities(self) -> tuple[str, ...]:
        checks = (("session", self.session), ("user", self.user), ("identity", self.identity))
        return tuple(name for name, result in checks if not result.valid)


class FailureCategory(StrEnum):
    ASSERTION_INVALID = "assertion_invalid"
    REGISTRY_OUTAGE = "registry_outage"
    VALIDATION_FAILED = "validation_failed"


@dataclass(frozen=True, slots=True)
class FailureCode:
    """Stable code for a failure category; external dashboards key on these."""

    code: str
    tag: str
    short_message: str
    severity: Severity = Severity.ERROR


DEFAULT_ERROR_MESSAGE: Final[str] = "Default generic identity provider error"

FAILURE_CODES: Final[Mapping[FailureCategory, FailureCode]] = MappingProxyType(
    {
        FailureCategory.ASSERTION_INVALID: FailureCode(
            "007", "assertion_invalid", DEFAULT_ERROR_MESSAGE
        ),
        FailureCategory.VALIDATION_FAILED: FailureCode(
            "004", "validations_failed", "on User/Session Validation"
        ),
        FailureCategory.REGISTRY_OUTAGE: FailureCode("006", "mvi_outage", "MVI is unavailable"),
    }
)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationFailure:
    """Everything the classifier may inspect about one failed attempt."""

    assertion_errors: tuple[AssertionFailure, ...] = ()
    attributes: IdentityAttributes | None = None
    triad: ReconciledSession | None = None
    validation: TriadValidation | None = None

    def __post_init__(self) -> None:
        if not self.assertion_errors and (self.triad is None or self.validation is None):
            raise ValueError(
                "A failure without assertion errors must carry the triad and its validation"
            )


@dataclass(frozen=True, slots=True, kw_only=True)
class FailureDiagnostic:
    """Structured, loggable description of a failed reconciliation."""

    category: FailureCategory
    code: str
    tag: str
    severity: Severity
    message: str
    context: Mapping[str, object] = field(default_factory=dict)
    outage: OutageWindow | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    @property
    def instrumentation_tag(self) -> str:
        return f"error:{self.tag}"

    @property
    def retryable(self) -> bool:
        return self.category is FailureCategory.REGISTRY_OUTAGE


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    """Outcome handed back to the request-handling layer."""

    success: bool
    session: Session | None = None
    is_new_login: bool = False
    diagnostic: FailureDiagnostic | None = None

    @property
    def failure_code(self) -> str | None:
        return self.diagnostic.code if self.diagnostic else None

    @property
    def failure_category(self) -> FailureCategory | None:
        return self.diagnostic.category if self.diagnostic else None

    @property
    def instrumentation_tag(self) -> str | None:
        return self.diagnostic.instrumentation_tag if self.diagnostic else None
