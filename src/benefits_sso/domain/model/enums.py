"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SignInSource(StrEnum):
    """Identity provider whose attribute statement format an assertion carries."""

    IDME = "idme"
    MHV = "myhealthevet"
    DSLOGON = "dslogon"


class AuthnContext(StrEnum):
    IDME_LOA1 = "http://idmanagement.gov/ns/assurance/loa/1/vets"
    IDME_LOA3 = "http://idmanagement.gov/ns/assurance/loa/3/vets"
    IDME_MULTIFACTOR = "multifactor"

    MHV = "myhealthevet"
    MHV_MULTIFACTOR = "myhealthevet_multifactor"
    MHV_LOA3 = "myhealthevet_loa3"

    DSLOGON = "dslogon"
    DSLOGON_MULTIFACTOR = "dslogon_multifactor"
    DSLOGON_LOA3 = "dslogon_loa3"

    @property
    def statement_source(self) -> SignInSource:
        return _SOURCE_BY_CONTEXT[self]

    @property
    def lineage(self) -> SignInSource:
        """Provider whose account this sign-in belongs to, LOA3 upgrades included."""
        return _LINEAGE_BY_CONTEXT[self]

    def shares_lineage_with(self, other: AuthnContext) -> bool:
        return self.lineage is other.lineage

    @property
    def is_multifactor_step_up(self) -> bool:
        return self in _MULTIFACTOR_CONTEXTS

    @property
    def is_loa3_verification(self) -> bool:
        return self in _LOA3_CONTEXTS


# Identity-proofed (LOA3) sign-ins are asserted by ID.me whatever the original source.
_SOURCE_BY_CONTEXT: dict[AuthnContext, SignInSource] = {
    AuthnContext.IDME_LOA1: SignInSource.IDME,
    AuthnContext.IDME_LOA3: SignInSource.IDME,
    AuthnContext.IDME_MULTIFACTOR: SignInSource.IDME,
    AuthnContext.MHV: SignInSource.MHV,
    AuthnContext.MHV_MULTIFACTOR: SignInSource.MHV,
    AuthnContext.MHV_LOA3: SignInSource.IDME,
    AuthnContext.DSLOGON: SignInSource.DSLOGON,
    AuthnContext.DSLOGON_MULTIFACTOR: SignInSource.DSLOGON,
    AuthnContext.DSLOGON_LOA3: SignInSource.IDME,
}

_LINEAGE_BY_CONTEXT: dict[AuthnContext, SignInSource] = {
    AuthnContext.IDME_LOA1: SignInSource.IDME,
    AuthnContext.IDME_LOA3: SignInSource.IDME,
    AuthnContext.IDME_MULTIFACTOR: SignInSource.IDME,
    AuthnContext.MHV: SignInSource.MHV,
    AuthnContext.MHV_MULTIFACTOR: SignInSource.MHV,
    AuthnContext.MHV_LOA3: SignInSource.MHV,
    AuthnContext.DSLOGON: SignInSource.DSLOGON,
    AuthnContext.DSLOGON_MULTIFACTOR: SignInSource.DSLOGON,
    AuthnContext.DSLOGON_LOA3: SignInSource.DSLOGON,
}

_MULTIFACTOR_CONTEXTS = frozenset(
    {
        AuthnContext.IDME_MULTIFACTOR,
        AuthnContext.MHV_MULTIFACTOR,
        AuthnContext.DSLOGON_MULTIFACTOR,
    }
)

# ID.me identity proofing upgrades a sign-in from any source to LOA3.
_LOA3_CONTEXTS = frozenset(
    {
        AuthnContext.IDME_LOA3,
        AuthnContext.MHV_LOA3,
        AuthnContext.DSLOGON_LOA3,
    }
)


class AccountType(StrEnum):
    """My HealtheVet account tier."""

    BASIC = "Basic"
    ADVANCED = "Advanced"
    PREMIUM = "Premium"
    NONE = "None"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
