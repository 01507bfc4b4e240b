"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from benefits_sso.adapters.diagnostics import LoggingDiagnosticsSink
from benefits_sso.adapters.outage import HttpOutageMonitor, OutageTracker
from benefits_sso.adapters.saml import SamlAssertionValidator
from benefits_sso.adapters.sqlalchemy.migrations import upgrade_head
from benefits_sso.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySignInUnitOfWork,
    is_started,
    startup,
)
from benefits_sso.config import get_mvi_status_config
from benefits_sso.domain.ports import SignInUnitOfWork
from benefits_sso.domain.reconciliation import (
    ExistingIdentityResolver,
    FailureClassifier,
    ReconciliationEngine,
    SessionPersistenceGateway,
)

if TYPE_CHECKING:
    from benefits_sso.adapters.saml import SamlResponse
    from benefits_sso.domain.ports import DiagnosticsSink, OutageMonitor
    from benefits_sso.domain.reconciliation import ReconciliationResult

UnitOfWorkFactory = Callable[[], SignInUnitOfWork]


log = getLogger(__name__)


def build_outage_monitor() -> OutageMonitor:
    """HTTP monitor when ``MVI_STATUS_URL`` is set, otherwise an empty in-process tracker."""

    config = get_mvi_status_config()
    if config is None:
        log.debug("MVI_STATUS_URL not set; outage state is tracked in-process only")
        return OutageTracker()
    return HttpOutageMonitor(config=config)


def build_sign_in_service(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    outage_monitor: OutageMonitor | None = None,
    sink: DiagnosticsSink | None = None,
) -> ReconciliationEngine:
    """Wire the reconciliation engine to the configured adapters."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemySignInUnitOfWork

    resolver = ExistingIdentityResolver(unit_of_work_factory)
    return ReconciliationEngine(
        validate_assertion=SamlAssertionValidator(),
        lookup=resolver,
        retirement=resolver,
        classifier=FailureClassifier(
            outage_monitor=outage_monitor or build_outage_monitor(),
            sink=sink or LoggingDiagnosticsSink(),
        ),
        gateway=SessionPersistenceGateway(unit_of_work_factory),
    )


def authenticate(
    response: SamlResponse,
    *,
    service: ReconciliationEngine | None = None,
) -> ReconciliationResult:
    """Reconcile one SAML response into a persisted session or a classified failure."""

    engine = service or build_sign_in_service()
    result = engine.reconcile(response)
    if result.success:
        log.info("Sign-in succeeded (new_login=%s)", result.is_new_login)
    else:
        log.info("Sign-in failed: %s", result.instrumentation_tag)
    return result


def initialize_database(*, database_uri: str | None = None) -> None:
    """Apply all pending schema migrations."""

    log.info("Upgrading database schema")
    upgrade_head(database_uri=database_uri)
