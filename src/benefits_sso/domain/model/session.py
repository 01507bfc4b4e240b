"""Sign-in entities persisted as one triad: session, user, user identity."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from benefits_sso.domain.model.identity import CorrelationIds, IdentityAttributes

SESSION_TOKEN_BYTES = 32


def new_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Session:
    """Ties a session token to the principal for the session's lifetime."""

    principal_id: str
    token: str = field(default_factory=new_session_token, repr=False)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False, kw_only=True)
class User:
    """Tracks when the principal last signed in, overall and through My HealtheVet."""

    principal_id: str
    last_signed_in: datetime | None = None
    mhv_last_signed_in: datetime | None = None


@dataclass(eq=False, kw_only=True)
class UserIdentity:
    """Identity attributes persisted for the lifetime of the current sign-in."""

    principal_id: str
    email: str | None
    authn_context: str
    loa_current: int
    loa_highest: int
    multifactor: bool = False
    account_type: str | None = None

    mhv_correlation_id: str | None = None
    mhv_icn: str | None = None
    dslogon_edipi: str | None = None

    @classmethod
    def from_attributes(
        cls,
        attributes: IdentityAttributes,
        *,
        correlation_ids: CorrelationIds | None = None,
    ) -> UserIdentity:
        ids = correlation_ids or attributes.correlation_ids
        return cls(
            principal_id=attributes.principal_id,
            email=attributes.email,
            authn_context=str(attributes.authn_context),
            loa_current=attributes.loa_current,
            loa_highest=attributes.loa_highest,
            multifactor=attributes.multifactor_asserted,
            account_type=str(attributes.account_type),
            mhv_correlation_id=ids.mhv_correlation_id,
            mhv_icn=ids.mhv_icn,
            dslogon_edipi=ids.dslogon_edipi,
        )

    @property
    def loa(self) -> dict[str, int]:
        return {"current": self.loa_current, "highest": self.loa_highest}
