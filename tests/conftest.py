from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from benefits_sso.adapters.sqlalchemy import start_mappers
from benefits_sso.adapters.sqlalchemy.migrations import upgrade_head
from benefits_sso.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySignInUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.sign_in import (
    FIXED_NOW,
    InMemorySignInStore,
    RecordingSink,
    StaticOutageMonitor,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import datetime


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def store() -> InMemorySignInStore:
    return InMemorySignInStore()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def outage_monitor() -> StaticOutageMonitor:
    return StaticOutageMonitor()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemySignInUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemySignInUnitOfWork:
        return SqlAlchemySignInUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
