from __future__ import annotations

import pytest

from benefits_sso.domain.reconciliation import (
    PersistenceError,
    ReconciledSession,
    SessionPersistenceGateway,
    build_triad,
)
from tests.helpers.sign_in import FIXED_NOW, InMemorySignInStore, make_attributes


def _triad() -> ReconciledSession:
    return build_triad(
        make_attributes(),
        existing=None,
        multifactor_change_detected=False,
        now=FIXED_NOW,
    )


def test_gateway_persists_all_three_members(store: InMemorySignInStore) -> None:
    triad = _triad()

    SessionPersistenceGateway(store.unit_of_work).persist(triad)

    assert store.sessions == {triad.session.token: triad.session}
    assert store.users == {"U1": triad.user}
    assert store.identities == {"U1": triad.identity}
    assert store.commits == 1


@pytest.mark.parametrize("entity", ["session", "user", "identity"])
def test_failed_write_leaves_no_partial_triad(store: InMemorySignInStore, entity: str) -> None:
    store.fail_on = entity  # type: ignore[assignment]

    with pytest.raises(PersistenceError) as excinfo:
        SessionPersistenceGateway(store.unit_of_work).persist(_triad())

    assert excinfo.value.entity == entity
    assert store.sessions == {}
    assert store.users == {}
    assert store.identities == {}
    assert store.commits == 0


def test_failed_commit_is_reported_for_whole_triad(store: InMemorySignInStore) -> None:
    store.fail_on = "commit"

    with pytest.raises(PersistenceError) as excinfo:
        SessionPersistenceGateway(store.unit_of_work).persist(_triad())

    assert excinfo.value.entity == "triad"
    assert store.users == {}
