"""Boundary type for SAML responses handed over by the SAML library."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .schema import SamlResponsePayload

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class SamlResponse:
    """A parsed SAML response after signature and condition checks.

    ``errors`` holds the raw messages the SAML library reported; an empty tuple
    means the library accepted the response.
    """

    authn_context: str | None
    attributes: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def from_payload(cls, payload: SamlResponsePayload) -> SamlResponse:
        return cls(
            authn_context=payload.authn_context,
            attributes={name: tuple(values) for name, values in payload.attributes.items()},
            errors=tuple(payload.errors),
        )

    @classmethod
    def from_json(cls, document: str | bytes) -> SamlResponse:
        return cls.from_payload(SamlResponsePayload.model_validate_json(document))

    @classmethod
    def from_file(cls, path: Path | str) -> SamlResponse:
        return cls.from_json(Path(path).read_bytes())
