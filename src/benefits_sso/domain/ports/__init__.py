"""Domain port definitions for adapters."""

from __future__ import annotations

from .assertion import AssertionFailure, AssertionValidation, AssertionValidator
from .diagnostics import DiagnosticsSink
from .outage import OutageMonitor, OutageMonitorError, OutageWindow
from .persistence import (
    ExistingIdentityLookup,
    IdentityRetirement,
    PrincipalScopedRepository,
    Repository,
    SessionRepository,
    StorageError,
    UserIdentityRepository,
    UserRepository,
)
from .unit_of_work import (
    RepositoryCollection,
    SignInRepositories,
    SignInUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "AssertionFailure",
    "AssertionValidation",
    "AssertionValidator",
    "DiagnosticsSink",
    "ExistingIdentityLookup",
    "IdentityRetirement",
    "OutageMonitor",
    "OutageMonitorError",
    "OutageWindow",
    "PrincipalScopedRepository",
    "Repository",
    "RepositoryCollection",
    "SessionRepository",
    "SignInRepositories",
    "SignInUnitOfWork",
    "StorageError",
    "UnitOfWork",
    "UserIdentityRepository",
    "UserRepository",
]
