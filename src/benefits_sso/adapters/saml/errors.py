"""Catalogue of known SAML failures and normalisation of raw library errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from benefits_sso.domain.model import Severity
from benefits_sso.domain.ports import AssertionFailure
from benefits_sso.domain.reconciliation import DEFAULT_ERROR_MESSAGE

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class KnownSamlError:
    code: str
    tag: str
    short_message: str
    severity: Severity
    marker: str | None = None

    def failure(self, detail: str | None = None) -> AssertionFailure:
        return AssertionFailure(
            code=self.code,
            tag=self.tag,
            short_message=self.short_message,
            severity=self.severity,
            detail=detail,
        )


CLICKED_DENY: Final = KnownSamlError(
    "001",
    "clicked_deny",
    "Subject did not consent to attribute release",
    Severity.WARNING,
    marker="Subject did not consent to attribute release",
)
AUTH_TOO_LATE: Final = KnownSamlError(
    "002",
    "auth_too_late",
    "Current time is on or after NotOnOrAfter condition",
    Severity.WARNING,
    marker="Current time is on or after NotOnOrAfter condition",
)
AUTH_TOO_EARLY: Final = KnownSamlError(
    "003",
    "auth_too_early",
    "Current time is earlier than NotBefore condition",
    Severity.ERROR,
    marker="Current time is earlier than NotBefore condition",
)
UNKNOWN_AUTHN_CONTEXT: Final = KnownSamlError(
    "005",
    "unknown_authn_context",
    "Unrecognised authn context",
    Severity.ERROR,
)
UNKNOWN_ERROR: Final = KnownSamlError(
    "007",
    "unknown",
    DEFAULT_ERROR_MESSAGE,
    Severity.ERROR,
)
MISSING_ATTRIBUTES: Final = KnownSamlError(
    "008",
    "missing_attributes",
    "Required identity attributes are missing or malformed",
    Severity.ERROR,
)

_MATCHABLE_ERRORS: Final[tuple[KnownSamlError, ...]] = (
    CLICKED_DENY,
    AUTH_TOO_LATE,
    AUTH_TOO_EARLY,
)


def normalize_error(raw: str) -> AssertionFailure:
    """Map one raw error string from the SAML library onto the catalogue."""

    for known in _MATCHABLE_ERRORS:
        if known.marker is not None and known.marker in raw:
            return known.failure(raw)
    return UNKNOWN_ERROR.failure(raw)


def normalize_errors(raw_errors: Iterable[str]) -> tuple[AssertionFailure, ...]:
    """Normalise raw errors, keeping their order and dropping exact repeats."""

    seen: set[tuple[str, str | None]] = set()
    normalized: list[AssertionFailure] = []
    for raw in raw_errors:
        failure = normalize_error(raw.strip())
        key = (failure.tag, failure.detail)
        if key in seen:
            continue
        seen.add(key)
        normalized.append(failure)
    return tuple(normalized)
