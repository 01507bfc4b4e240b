"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete

from benefits_sso.adapters.sqlalchemy.mappings import (
    session_table,
    user_identity_table,
    user_table,
)
from benefits_sso.domain.model import Session, User, UserIdentity

if TYPE_CHECKING:
    from sqlalchemy import CursorResult, Table
    from sqlalchemy.orm import Session as OrmSession


def _delete_for_principal(session: OrmSession, table: Table, principal_id: str) -> int:
    stmt = delete(table).where(table.c.principal_id == principal_id)
    result = cast("CursorResult[Any]", session.execute(stmt))
    return result.rowcount


class SqlAlchemySessionRepository:
    def __init__(self, session: OrmSession) -> None:
        self.session = session

    def add(self, entity: Session) -> None:
        self.session.add(entity)

    def get_by_token(self, token: str) -> Session | None:
        return self.session.get(Session, token)

    def remove_for_principal(self, principal_id: str) -> int:
        return _delete_for_principal(self.session, session_table, principal_id)


class SqlAlchemyPrincipalRepository[TEntity: (User, UserIdentity)]:
    """Shared helpers for tables keyed by principal id."""

    def __init__(self, session: OrmSession, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, principal_id: str) -> TEntity | None:
        return self.session.get(self._entity_cls, principal_id)

    def remove_for_principal(self, principal_id: str) -> int:
        return _delete_for_principal(self.session, self._table, principal_id)


class SqlAlchemyUserRepository(SqlAlchemyPrincipalRepository[User]):
    def __init__(self, session: OrmSession) -> None:
        super().__init__(session, User, user_table)


class SqlAlchemyUserIdentityRepository(SqlAlchemyPrincipalRepository[UserIdentity]):
    def __init__(self, session: OrmSession) -> None:
        super().__init__(session, UserIdentity, user_identity_table)
