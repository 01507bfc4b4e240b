"""Assertion validator turning SAML responses into identity attributes."""

from __future__ import annotations

from logging import getLogger

from benefits_sso.domain.ports import AssertionValidation

from .errors import MISSING_ATTRIBUTES, UNKNOWN_AUTHN_CONTEXT, normalize_errors
from .response import SamlResponse
from .translator import (
    AttributeExtractionError,
    UnknownAuthnContextError,
    parse_identity_attributes,
)

log = getLogger(__name__)


class SamlAssertionValidator:
    """Validate a ``SamlResponse`` and extract its identity attributes.

    Attributes are still extracted from a rejected response when possible, so the
    caller can retire a stale sign-in for the same principal.
    """

    def __call__(self, assertion: object) -> AssertionValidation:
        if not isinstance(assertion, SamlResponse):
            raise TypeError(
                f"Expected a SamlResponse, got {type(assertion).__name__}"
            )

        errors = normalize_errors(assertion.errors)
        try:
            attributes = parse_identity_attributes(assertion.authn_context, assertion.attributes)
        except UnknownAuthnContextError as exc:
            log.info("Rejecting assertion: %s", exc)
            return AssertionValidation(None, errors or (UNKNOWN_AUTHN_CONTEXT.failure(str(exc)),))
        except AttributeExtractionError as exc:
            log.info("Rejecting assertion: %s", exc)
            return AssertionValidation(None, errors or (MISSING_ATTRIBUTES.failure(str(exc)),))
        return AssertionValidation(attributes, errors)
