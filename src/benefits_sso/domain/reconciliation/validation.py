"""Presence and shape checks for the reconciled triad.

Each member is validated on its own so a failure report never conflates which
member was at fault.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from benefits_sso.domain.model import LOA_MAX, LOA_MIN, AuthnContext

from .contracts import EntityValidation, TriadValidation

if TYPE_CHECKING:
    from benefits_sso.domain.model import Session, User, UserIdentity

    from .contracts import ReconciledSession

_KNOWN_AUTHN_CONTEXTS = frozenset(str(context) for context in AuthnContext)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_session(session: Session) -> EntityValidation:
    errors: list[str] = []
    if _blank(session.token):
        errors.append("Token can't be blank")
    if _blank(session.principal_id):
        errors.append("Uuid can't be blank")
    return EntityValidation(tuple(errors))


def validate_user(user: User) -> EntityValidation:
    errors: list[str] = []
    if _blank(user.principal_id):
        errors.append("Uuid can't be blank")
    if user.last_signed_in is None:
        errors.append("Last signed in can't be blank")
    return EntityValidation(tuple(errors))


def validate_identity(identity: UserIdentity) -> EntityValidation:
    errors: list[str] = []
    if _blank(identity.principal_id):
        errors.append("Uuid can't be blank")
    if _blank(identity.email):
        errors.append("Email can't be blank")
    if _blank(identity.authn_context):
        errors.append("Authn context can't be blank")
    elif identity.authn_context not in _KNOWN_AUTHN_CONTEXTS:
        errors.append(f"Authn context {identity.authn_context!r} is not recognised")
    for name, value in (("current", identity.loa_current), ("highest", identity.loa_highest)):
        if not LOA_MIN <= value <= LOA_MAX:
            errors.append(f"Loa {name} must be between {LOA_MIN} and {LOA_MAX}")
    if identity.loa_highest < identity.loa_current:
        errors.append("Loa highest must be greater than or equal to current")
    return EntityValidation(tuple(errors))


def validate_triad(triad: ReconciledSession) -> TriadValidation:
    """Validate session, user, and identity independently."""

    return TriadValidation(
        session=validate_session(triad.session),
        user=validate_user(triad.user),
        identity=validate_identity(triad.identity),
    )
