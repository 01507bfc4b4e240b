"""Construct a fresh sign-in triad from new attributes and any prior sign-in.

The triad is always built from scratch; an existing identity contributes only
its sign-in timestamps (on a multifactor step-up) and, within the same provider
lineage, the allow-listed correlation ids in ``MERGEABLE_IDENTITY_ATTRIBUTES``.
Everything else comes from the new assertion, including the account tier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from benefits_sso.domain.model import Session, User, UserIdentity

from .contracts import ReconciledSession

if TYPE_CHECKING:
    from datetime import datetime

    from benefits_sso.domain.model import CorrelationIds, ExistingIdentity, IdentityAttributes


def build_user(
    principal_id: str,
    *,
    existing: ExistingIdentity | None,
    multifactor_change_detected: bool,
    now: datetime,
) -> User:
    """A step-up to multifactor is not a new visit, so it keeps the prior timestamps."""

    if multifactor_change_detected and existing is not None:
        return User(
            principal_id=principal_id,
            last_signed_in=existing.last_signed_in,
            mhv_last_signed_in=existing.mhv_last_signed_in,
        )
    return User(principal_id=principal_id, last_signed_in=now, mhv_last_signed_in=now)


def merge_correlation_ids(
    attributes: IdentityAttributes,
    existing: ExistingIdentity | None,
) -> tuple[CorrelationIds, tuple[str, ...]]:
    """Fill correlation ids the new assertion lacks from the existing identity.

    Ids only move between sign-ins of the same provider lineage, e.g. an MHV
    sign-in and its ID.me LOA3 upgrade (``myhealthevet_loa3``). A stored
    identity of unknown lineage contributes nothing.

    Returns the merged ids and the names of the ids that were carried forward.
    """

    if existing is None or existing.authn_context is None:
        return attributes.correlation_ids, ()
    if not attributes.authn_context.shares_lineage_with(existing.authn_context):
        return attributes.correlation_ids, ()
    carried = attributes.correlation_ids.gaps_filled_by(existing.correlation_ids)
    merged = attributes.correlation_ids.fill_missing_from(existing.correlation_ids)
    return merged, carried


def build_triad(
    attributes: IdentityAttributes,
    *,
    existing: ExistingIdentity | None,
    multifactor_change_detected: bool,
    now: datetime,
) -> ReconciledSession:
    is_new_login = existing is not None
    correlation_ids, carried = merge_correlation_ids(attributes, existing)
    identity = UserIdentity.from_attributes(attributes, correlation_ids=correlation_ids)
    user = build_user(
        attributes.principal_id,
        existing=existing,
        multifactor_change_detected=multifactor_change_detected,
        now=now,
    )
    return ReconciledSession(
        session=Session(principal_id=attributes.principal_id, created_at=now),
        user=user,
        identity=identity,
        is_new_login=is_new_login,
        carried_attributes=carried,
    )
