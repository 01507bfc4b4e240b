"""Resolve and retire a principal's previously persisted sign-in."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from benefits_sso.domain.model import AuthnContext, CorrelationIds, ExistingIdentity

if TYPE_CHECKING:
    from benefits_sso.domain.ports import SignInUnitOfWork

log = getLogger(__name__)


def _stored_authn_context(principal_id: str, value: str) -> AuthnContext | None:
    try:
        return AuthnContext(value)
    except ValueError:
        log.warning("Stored identity for %s has unknown authn context %r", principal_id, value)
        return None


@dataclass(slots=True)
class ExistingIdentityResolver:
    """Point lookup and point delete of a sign-in by principal id."""

    unit_of_work_factory: Callable[[], SignInUnitOfWork]

    def find(self, principal_id: str) -> ExistingIdentity | None:
        with self.unit_of_work_factory() as uow:
            user = uow.repositories.users.get(principal_id)
            if user is None:
                return None
            identity = uow.repositories.identities.get(principal_id)

            authn_context: AuthnContext | None = None
            correlation_ids = CorrelationIds()
            if identity is not None:
                authn_context = _stored_authn_context(principal_id, identity.authn_context)
                correlation_ids = CorrelationIds(
                    mhv_correlation_id=identity.mhv_correlation_id,
                    mhv_icn=identity.mhv_icn,
                    dslogon_edipi=identity.dslogon_edipi,
                )
            return ExistingIdentity(
                principal_id=principal_id,
                last_signed_in=user.last_signed_in,
                mhv_last_signed_in=user.mhv_last_signed_in,
                authn_context=authn_context,
                correlation_ids=correlation_ids,
            )

    def retire(self, existing: ExistingIdentity) -> bool:
        """Delete every row of the existing sign-in in its own committed unit."""

        principal_id = existing.principal_id
        with self.unit_of_work_factory() as uow:
            removed = (
                uow.repositories.sessions.remove_for_principal(principal_id)
                + uow.repositories.users.remove_for_principal(principal_id)
                + uow.repositories.identities.remove_for_principal(principal_id)
            )
            uow.commit()
        log.debug("Retired %s row(s) for principal %s", removed, principal_id)
        return removed > 0
