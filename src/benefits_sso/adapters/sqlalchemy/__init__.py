"""SQLAlchemy adapter package for sign-in persistence."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserIdentityRepository,
    SqlAlchemyUserRepository,
)

__all__ = [
    "SqlAlchemySessionRepository",
    "SqlAlchemyUserIdentityRepository",
    "SqlAlchemyUserRepository",
    "mapper_registry",
    "start_mappers",
]
