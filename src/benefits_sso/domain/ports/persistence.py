"""Ports for persisting sign-in aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from benefits_sso.domain.model import Session, User, UserIdentity

if TYPE_CHECKING:
    from benefits_sso.domain.model import ExistingIdentity


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class PrincipalScopedRepository[TEntity](Repository[TEntity], Protocol):
    """Repository whose rows are looked up and deleted by principal id."""

    def get(self, principal_id: str) -> TEntity | None: ...

    def remove_for_principal(self, principal_id: str) -> int: ...


@runtime_checkable
class SessionRepository(Repository[Session], Protocol):
    """Persistence contract for sessions."""

    def get_by_token(self, token: str) -> Session | None: ...

    def remove_for_principal(self, principal_id: str) -> int: ...


@runtime_checkable
class UserRepository(PrincipalScopedRepository[User], Protocol):
    """Persistence contract for users."""


@runtime_checkable
class UserIdentityRepository(PrincipalScopedRepository[UserIdentity], Protocol):
    """Persistence contract for user identities."""


@runtime_checkable
class ExistingIdentityLookup(Protocol):
    """Point lookup of a previously persisted sign-in by principal id."""

    def find(self, principal_id: str) -> ExistingIdentity | None: ...


@runtime_checkable
class IdentityRetirement(Protocol):
    """Delete a previously persisted sign-in; return whether anything was removed."""

    def retire(self, existing: ExistingIdentity) -> bool: ...


class StorageError(RuntimeError):
    """Raised by storage adapters when a write, flush, or commit fails."""
