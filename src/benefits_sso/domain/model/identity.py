"""Identity attribute snapshots exchanged between the extractor and the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from benefits_sso.domain.model.enums import AccountType, AuthnContext

if TYPE_CHECKING:
    from datetime import datetime

LOA_MIN: Final[int] = 1
LOA_MAX: Final[int] = 3

# Expensive to re-derive; carried only between sign-ins of the same lineage.
MERGEABLE_IDENTITY_ATTRIBUTES: Final[tuple[str, ...]] = (
    "mhv_correlation_id",
    "mhv_icn",
    "dslogon_edipi",
)


@dataclass(frozen=True, slots=True, kw_only=True)
class CorrelationIds:
    """Internal identifiers assigned to the principal by individual source systems."""

    mhv_correlation_id: str | None = None
    mhv_icn: str | None = None
    dslogon_edipi: str | None = None

    def fill_missing_from(self, other: CorrelationIds) -> CorrelationIds:
        """Return a copy where ids this instance lacks are taken from ``other``."""

        return CorrelationIds(
            mhv_correlation_id=(
                self.mhv_correlation_id
                if self.mhv_correlation_id is not None
                else other.mhv_correlation_id
            ),
            mhv_icn=self.mhv_icn if self.mhv_icn is not None else other.mhv_icn,
            dslogon_edipi=(
                self.dslogon_edipi if self.dslogon_edipi is not None else other.dslogon_edipi
            ),
        )

    def gaps_filled_by(self, other: CorrelationIds) -> tuple[str, ...]:
        """Names of allow-listed ids ``other`` would contribute to this instance."""

        mine = self.as_mapping()
        theirs = other.as_mapping()
        return tuple(
            name
            for name in MERGEABLE_IDENTITY_ATTRIBUTES
            if name not in mine and name in theirs
        )

    def as_mapping(self) -> dict[str, str]:
        values = {
            "mhv_correlation_id": self.mhv_correlation_id,
            "mhv_icn": self.mhv_icn,
            "dslogon_edipi": self.dslogon_edipi,
        }
        return {name: value for name, value in values.items() if value is not None}


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityAttributes:
    """Canonical attributes asserted by one federated sign-in.

    Created fresh per authentication attempt and never mutated.
    """

    principal_id: str
    email: str | None
    authn_context: AuthnContext
    loa_current: int
    loa_highest: int
    multifactor_asserted: bool = False
    account_type: AccountType = AccountType.NONE
    correlation_ids: CorrelationIds = field(default_factory=CorrelationIds)

    def __post_init__(self) -> None:
        for name, value in (("loa_current", self.loa_current), ("loa_highest", self.loa_highest)):
            if not LOA_MIN <= value <= LOA_MAX:
                raise ValueError(f"{name} must be between {LOA_MIN} and {LOA_MAX}, got {value}")
        if self.loa_highest < self.loa_current:
            raise ValueError(
                f"loa_highest ({self.loa_highest}) must not be below "
                f"loa_current ({self.loa_current})"
            )

    @property
    def changing_multifactor(self) -> bool:
        """Whether this sign-in is a multifactor step-up of an earlier one."""
        return self.authn_context.is_multifactor_step_up

    @property
    def loa(self) -> dict[str, int]:
        return {"current": self.loa_current, "highest": self.loa_highest}


@dataclass(frozen=True, slots=True, kw_only=True)
class ExistingIdentity:
    """Read-only view of a previously persisted sign-in for the same principal."""

    principal_id: str
    last_signed_in: datetime | None = None
    mhv_last_signed_in: datetime | None = None
    authn_context: AuthnContext | None = None
    correlation_ids: CorrelationIds = field(default_factory=CorrelationIds)
