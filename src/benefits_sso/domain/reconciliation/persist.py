"""Persistence of a reconciled triad.

Responsibilities of this stage:
- write session, then user, then identity
- flush after each write so a failure names the member that caused it
- commit once, so storage never holds a partial triad
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from benefits_sso.domain.ports import StorageError

if TYPE_CHECKING:
    from benefits_sso.domain.ports import SignInRepositories, SignInUnitOfWork

    from .contracts import ReconciledSession

log = getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when a member of the triad could not be written."""

    def __init__(self, message: str, *, entity: str) -> None:
        super().__init__(message)
        self.entity = entity


def _writes(
    repositories: SignInRepositories,
    triad: ReconciledSession,
) -> tuple[tuple[str, Callable[[], None]], ...]:
    return (
        ("session", lambda: repositories.sessions.add(triad.session)),
        ("user", lambda: repositories.users.add(triad.user)),
        ("identity", lambda: repositories.identities.add(triad.identity)),
    )


@dataclass(slots=True)
class SessionPersistenceGateway:
    unit_of_work_factory: Callable[[], SignInUnitOfWork]

    def persist(self, triad: ReconciledSession) -> None:
        """Persist ``triad`` all-or-nothing, raising ``PersistenceError`` on failure."""

        with self.unit_of_work_factory() as uow:
            writes = _writes(uow.repositories, triad)
            for entity, write in writes:
                try:
                    write()
                    uow.flush()
                except StorageError as exc:
                    uow.rollback()
                    raise PersistenceError(
                        f"Failed to persist {entity} for principal {triad.principal_id}",
                        entity=entity,
                    ) from exc
            try:
                uow.commit()
            except StorageError as exc:
                uow.rollback()
                raise PersistenceError(
                    f"Failed to commit sign-in for principal {triad.principal_id}",
                    entity="triad",
                ) from exc

        log.info("Persisted %s sign-in rows for principal %s", len(writes), triad.principal_id)
