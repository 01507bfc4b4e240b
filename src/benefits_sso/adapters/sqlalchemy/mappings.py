"""SQLAlchemy mapping metadata for the sign-in triad."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers

from benefits_sso.domain.model import Session, User, UserIdentity

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

session_table = Table(
    "sessions",
    mapper_registry.metadata,
    Column("token", String(64), primary_key=True),
    Column("principal_id", String, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Index(None, "principal_id"),
)

user_table = Table(
    "users",
    mapper_registry.metadata,
    Column("principal_id", String, primary_key=True),
    Column("last_signed_in", UTCDateTime(), nullable=True),
    Column("mhv_last_signed_in", UTCDateTime(), nullable=True),
)

user_identity_table = Table(
    "user_identities",
    mapper_registry.metadata,
    Column("principal_id", String, primary_key=True),
    Column("email", String, nullable=True),
    Column("authn_context", String, nullable=False),
    Column("loa_current", Integer, nullable=False),
    Column("loa_highest", Integer, nullable=False),
    Column("multifactor", Boolean, nullable=False, default=False),
    Column("account_type", String(16), nullable=True),
    Column("mhv_correlation_id", String, nullable=True),
    Column("mhv_icn", String, nullable=True),
    Column("dslogon_edipi", String, nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the sign-in entities."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Session, session_table)
    mapper_registry.map_imperatively(User, user_table)
    mapper_registry.map_imperatively(UserIdentity, user_identity_table)

    configure_mappers()
    return mapper_registry
