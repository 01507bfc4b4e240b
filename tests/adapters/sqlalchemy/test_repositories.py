"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

from sqlalchemy.orm import Session as OrmSession  # noqa: TC002

from benefits_sso.adapters.sqlalchemy.repositories import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserIdentityRepository,
    SqlAlchemyUserRepository,
)
from benefits_sso.domain.model import Session, User, UserIdentity
from tests.helpers.sign_in import EARLIER, FIXED_NOW, IDME_LOA3


def test_session_repository_looks_up_by_token(sqlite_session: OrmSession) -> None:
    repository = SqlAlchemySessionRepository(sqlite_session)
    session = Session(principal_id="U1", created_at=FIXED_NOW)

    repository.add(session)
    sqlite_session.commit()

    found = repository.get_by_token(session.token)
    assert found is not None
    assert found.principal_id == "U1"
    assert repository.get_by_token("missing") is None


def test_session_repository_removes_every_session_of_principal(sqlite_session: OrmSession) -> None:
    repository = SqlAlchemySessionRepository(sqlite_session)
    first = Session(principal_id="U1", created_at=EARLIER)
    second = Session(principal_id="U1", created_at=FIXED_NOW)
    repository.add(first)
    repository.add(second)
    other = Session(principal_id="U2", created_at=FIXED_NOW)
    repository.add(other)
    removed_tokens = (first.token, second.token)
    kept_token = other.token
    sqlite_session.commit()

    removed = repository.remove_for_principal("U1")
    sqlite_session.commit()
    sqlite_session.expunge_all()

    assert removed == 2
    assert [repository.get_by_token(token) for token in removed_tokens] == [None, None]
    assert repository.get_by_token(kept_token) is not None


def test_user_repository_round_trip(sqlite_session: OrmSession) -> None:
    repository = SqlAlchemyUserRepository(sqlite_session)
    repository.add(User(principal_id="U1", last_signed_in=EARLIER, mhv_last_signed_in=FIXED_NOW))
    sqlite_session.commit()
    sqlite_session.expunge_all()

    user = repository.get("U1")

    assert user is not None
    assert user.last_signed_in == EARLIER
    assert user.mhv_last_signed_in == FIXED_NOW
    assert repository.remove_for_principal("U1") == 1
    assert repository.remove_for_principal("U1") == 0


def test_identity_repository_keeps_correlation_ids(sqlite_session: OrmSession) -> None:
    repository = SqlAlchemyUserIdentityRepository(sqlite_session)
    repository.add(
        UserIdentity(
            principal_id="U1",
            email="person@example.com",
            authn_context=IDME_LOA3,
            loa_current=3,
            loa_highest=3,
            multifactor=True,
            account_type="Premium",
            mhv_correlation_id="12345748",
            mhv_icn="1012853550V207686",
        )
    )
    sqlite_session.commit()
    sqlite_session.expunge_all()

    identity = repository.get("U1")

    assert identity is not None
    assert identity.loa == {"current": 3, "highest": 3}
    assert identity.multifactor is True
    assert identity.mhv_correlation_id == "12345748"
    assert identity.mhv_icn == "1012853550V207686"
    assert identity.dslogon_edipi is None
    assert repository.get("U2") is None
