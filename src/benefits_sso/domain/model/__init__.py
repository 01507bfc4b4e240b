"""Public domain model API."""

from __future__ import annotations

from .enums import AccountType, AuthnContext, Severity, SignInSource
from .identity import (
    LOA_MAX,
    LOA_MIN,
    MERGEABLE_IDENTITY_ATTRIBUTES,
    CorrelationIds,
    ExistingIdentity,
    IdentityAttributes,
)
from .session import Session, User, UserIdentity, new_session_token, utcnow

__all__ = [
    "LOA_MAX",
    "LOA_MIN",
    "MERGEABLE_IDENTITY_ATTRIBUTES",
    "AccountType",
    "AuthnContext",
    "CorrelationIds",
    "ExistingIdentity",
    "IdentityAttributes",
    "Session",
    "Severity",
    "SignInSource",
    "User",
    "UserIdentity",
    "new_session_token",
    "utcnow",
]
