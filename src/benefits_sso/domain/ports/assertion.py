"""Port for the SAML assertion validation boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from benefits_sso.domain.model import Severity

if TYPE_CHECKING:
    from benefits_sso.domain.model import IdentityAttributes


@dataclass(frozen=True, slots=True, kw_only=True)
class AssertionFailure:
    """One normalised reason an assertion was rejected upstream."""

    code: str
    tag: str
    short_message: str
    severity: Severity = Severity.ERROR
    detail: str | None = None

    def as_context(self) -> dict[str, str | None]:
        return {
            "code": self.code,
            "tag": self.tag,
            "short_message": self.short_message,
            "severity": str(self.severity),
            "detail": self.detail,
        }


@dataclass(frozen=True, slots=True)
class AssertionValidation:
    """Attributes extracted from an assertion plus any upstream errors, in order.

    ``attributes`` may still be present for an invalid assertion so that a stale
    identity for the same principal can be retired.
    """

    attributes: IdentityAttributes | None
    errors: tuple[AssertionFailure, ...] = ()

    def __post_init__(self) -> None:
        if not self.errors and self.attributes is None:
            raise ValueError("A valid assertion must yield identity attributes")

    @property
    def is_valid(self) -> bool:
        return not self.errors


@runtime_checkable
class AssertionValidator(Protocol):
    """Validate a raw assertion and extract canonical identity attributes.

    Implementations raise ``TypeError`` when handed something that is not an
    assertion; that is a caller bug, not an authentication failure.
    """

    def __call__(self, assertion: object) -> AssertionValidation: ...
