"""Translate SAML attribute statements into canonical identity attributes."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from benefits_sso.domain.model import (
    LOA_MAX,
    LOA_MIN,
    AccountType,
    AuthnContext,
    CorrelationIds,
    IdentityAttributes,
    SignInSource,
)

from .schema import (
    AttributeStatement,
    DsLogonAttributeStatement,
    IdmeAttributeStatement,
    MhvAttributeStatement,
)

if TYPE_CHECKING:
    from .schema import RawAttributes

log = getLogger(__name__)

LOA1 = LOA_MIN
LOA3 = LOA_MAX
DSLOGON_LOA3_ASSURANCE_LEVELS = frozenset({"2", "3"})


class AttributeExtractionError(ValueError):
    """Raised when an attribute statement cannot yield an identity."""


class UnknownAuthnContextError(AttributeExtractionError):
    """Raised for an authn context no identity provider mapping exists for."""

    def __init__(self, authn_context: str | None) -> None:
        super().__init__(f"Unrecognised authn context: {authn_context!r}")
        self.authn_context = authn_context


def parse_authn_context(value: str | None) -> AuthnContext:
    try:
        return AuthnContext((value or "").strip())
    except ValueError as exc:
        raise UnknownAuthnContextError(value) from exc


def _clamp_loa(value: int) -> int:
    return min(max(value, LOA_MIN), LOA_MAX)


def _loa_pair(current: int, highest: int | None) -> tuple[int, int]:
    current = _clamp_loa(current)
    highest = _clamp_loa(highest if highest is not None else current)
    return current, max(current, highest)


def _idme_attributes(
    context: AuthnContext,
    statement: IdmeAttributeStatement,
) -> IdentityAttributes:
    current = LOA3 if context.is_loa3_verification else LOA1
    loa_current, loa_highest = _loa_pair(current, statement.level_of_assurance)
    return _identity(statement, context, loa_current, loa_highest)


def _mhv_attributes(
    context: AuthnContext,
    statement: MhvAttributeStatement,
) -> IdentityAttributes:
    account_type = statement.mhv_profile.account_type
    loa = LOA3 if account_type is AccountType.PREMIUM else LOA1
    loa_current, loa_highest = _loa_pair(loa, loa)
    return _identity(
        statement,
        context,
        loa_current,
        loa_highest,
        account_type=account_type,
        correlation_ids=CorrelationIds(
            mhv_correlation_id=statement.mhv_uuid,
            mhv_icn=statement.mhv_icn,
        ),
    )


def _dslogon_attributes(
    context: AuthnContext,
    statement: DsLogonAttributeStatement,
) -> IdentityAttributes:
    loa = LOA3 if statement.dslogon_assurance in DSLOGON_LOA3_ASSURANCE_LEVELS else LOA1
    loa_current, loa_highest = _loa_pair(loa, loa)
    return _identity(
        statement,
        context,
        loa_current,
        loa_highest,
        correlation_ids=CorrelationIds(dslogon_edipi=statement.dslogon_uuid),
    )


def _identity(
    statement: AttributeStatement,
    context: AuthnContext,
    loa_current: int,
    loa_highest: int,
    *,
    account_type: AccountType = AccountType.NONE,
    correlation_ids: CorrelationIds | None = None,
) -> IdentityAttributes:
    return IdentityAttributes(
        principal_id=statement.uuid,
        email=statement.email,
        authn_context=context,
        loa_current=loa_current,
        loa_highest=loa_highest,
        multifactor_asserted=statement.multifactor,
        account_type=account_type,
        correlation_ids=correlation_ids or CorrelationIds(),
    )


def parse_identity_attributes(
    authn_context: str | None,
    attributes: RawAttributes,
) -> IdentityAttributes:
    """Extract canonical identity attributes from one attribute statement.

    Raises ``UnknownAuthnContextError`` for unrecognised contexts and
    ``AttributeExtractionError`` when required attributes are missing or malformed.
    """

    context = parse_authn_context(authn_context)
    try:
        match context.statement_source:
            case SignInSource.MHV:
                return _mhv_attributes(context, MhvAttributeStatement.model_validate(attributes))
            case SignInSource.DSLOGON:
                return _dslogon_attributes(
                    context, DsLogonAttributeStatement.model_validate(attributes)
                )
            case SignInSource.IDME:
                return _idme_attributes(context, IdmeAttributeStatement.model_validate(attributes))
    except ValidationError as exc:
        log.debug("Attribute statement rejected for %s: %s", context, exc)
        raise AttributeExtractionError(
            f"Invalid {context.statement_source} attribute statement: "
            f"{exc.error_count()} error(s)"
        ) from exc
