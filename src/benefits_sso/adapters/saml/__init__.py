"""Public interface for the SAML adapter."""

from __future__ import annotations

from .errors import KnownSamlError, normalize_error, normalize_errors
from .response import SamlResponse
from .schema import SamlResponsePayload
from .translator import (
    AttributeExtractionError,
    UnknownAuthnContextError,
    parse_identity_attributes,
)
from .validator import SamlAssertionValidator

__all__ = [
    "AttributeExtractionError",
    "KnownSamlError",
    "SamlAssertionValidator",
    "SamlResponse",
    "SamlResponsePayload",
    "UnknownAuthnContextError",
    "normalize_error",
    "normalize_errors",
    "parse_identity_attributes",
]
