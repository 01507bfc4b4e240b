from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from benefits_sso.adapters.sqlalchemy.mappings import session_table, user_identity_table
from benefits_sso.app import authenticate, build_sign_in_service
from benefits_sso.domain.ports import OutageWindow
from benefits_sso.domain.reconciliation import FailureCategory
from tests.helpers.sign_in import (
    EARLIER,
    IDME_LOA3,
    RecordingSink,
    StaticOutageMonitor,
    dslogon_response,
    idme_response,
    mhv_response,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy import Table

    from benefits_sso.adapters.sqlalchemy.unit_of_work import SqlAlchemySignInUnitOfWork
    from benefits_sso.domain.reconciliation import ReconciliationEngine

PRINCIPAL = "0e1bb5723d7c4f0686f46ca4505642ad"


def _service(
    factory: Callable[[], SqlAlchemySignInUnitOfWork],
    *,
    monitor: StaticOutageMonitor | None = None,
    sink: RecordingSink | None = None,
) -> ReconciliationEngine:
    return build_sign_in_service(
        unit_of_work_factory=factory,
        outage_monitor=monitor or StaticOutageMonitor(),
        sink=sink or RecordingSink(),
    )


def _count(factory: Callable[[], SqlAlchemySignInUnitOfWork], table: Table) -> int:
    with factory() as uow:
        return uow.session.execute(select(func.count()).select_from(table)).scalar_one()


def test_first_and_repeat_sign_in(
    sqlite_unit_of_work: Callable[[], SqlAlchemySignInUnitOfWork],
) -> None:
    service = _service(sqlite_unit_of_work)

    first = authenticate(mhv_response(), service=service)
    second = authenticate(mhv_response(), service=service)

    assert first.success
    assert first.is_new_login is False
    assert second.success
    assert second.is_new_login is True
    assert first.session is not None
    assert second.session is not None
    assert first.session.token != second.session.token
    assert _count(sqlite_unit_of_work, session_table) == 1
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.sessions.get_by_token(second.session.token) is not None


def test_loa_upgrade_keeps_mhv_correlation_ids(
    sqlite_unit_of_work: Callable[[], SqlAlchemySignInUnitOfWork],
) -> None:
    service = _service(sqlite_unit_of_work)
    authenticate(mhv_response(PRINCIPAL), service=service)

    result = authenticate(
        idme_response(PRINCIPAL, authn_context="myhealthevet_loa3"),
        service=service,
    )

    assert result.success
    with sqlite_unit_of_work() as uow:
        identity = uow.repositories.identities.get(PRINCIPAL)
        assert identity is not None
        assert identity.authn_context == "myhealthevet_loa3"
        assert identity.loa == {"current": 3, "highest": 3}
        assert identity.mhv_correlation_id == "12345748"
        assert identity.mhv_icn == "1012853550V207686"


def test_switching_provider_drops_previous_provider_ids(
    sqlite_unit_of_work: Callable[[], SqlAlchemySignInUnitOfWork],
) -> None:
    service = _service(sqlite_unit_of_work)
    authenticate(dslogon_response(PRINCIPAL), service=service)

    result = authenticate(mhv_response(PRINCIPAL), service=service)

    assert result.success
    with sqlite_unit_of_work() as uow:
        identity = uow.repositories.identities.get(PRINCIPAL)
        assert identity is not None
        assert identity.authn_context == "myhealthevet"
        assert identity.mhv_correlation_id == "12345748"
        assert identity.dslogon_edipi is None


def test_rejected_response_retires_stale_sign_in(
    sqlite_unit_of_work: Callable[[], SqlAlchemySignInUnitOfWork],
) -> None:
    sink = RecordingSink()
    service = _service(sqlite_unit_of_work, sink=sink)
    authenticate(idme_response(PRINCIPAL, authn_context=IDME_LOA3), service=service)

    result = authenticate(
        idme_response(
            PRINCIPAL,
            errors=(
                "Current time is on or after NotOnOrAfter condition",
                "Invalid Signature on SAML Response",
            ),
        ),
        service=service,
    )

    assert not result.success
    assert result.failure_code == "002"
    assert result.instrumentation_tag == "error:auth_too_late"
    assert _count(sqlite_unit_of_work, session_table) == 0
    assert _count(sqlite_unit_of_work, user_identity_table) == 0
    assert len(sink.records) == 1


def test_invalid_identity_during_outage_is_retryable(
    sqlite_unit_of_work: Callable[[], SqlAlchemySignInUnitOfWork],
) -> None:
    monitor = StaticOutageMonitor(window=OutageWindow(start_time=EARLIER))
    service = _service(sqlite_unit_of_work, monitor=monitor)

    result = authenticate(idme_response(email=" "), service=service)

    assert result.failure_category is FailureCategory.REGISTRY_OUTAGE
    assert result.diagnostic is not None
    assert result.diagnostic.retryable
    assert _count(sqlite_unit_of_work, session_table) == 0
