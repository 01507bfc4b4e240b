"""Pydantic models describing SAML attribute statements and captured responses."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from benefits_sso.domain.model import AccountType

type RawAttributes = Mapping[str, Sequence[str] | str | None]


def _first_value(value: object) -> object:
    """SAML attributes are multi-valued; the identity statement uses the first."""

    if isinstance(value, (list, tuple)):
        items = cast(Sequence[object], value)
        value = items[0] if items else None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SamlBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class AttributeStatement(SamlBaseModel):
    """Attributes every identity provider asserts."""

    uuid: str
    email: str | None = None
    multifactor: bool = False

    @model_validator(mode="before")
    @classmethod
    def _unwrap_multi_valued(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            return {key: _first_value(item) for key, item in mapping_value.items()}
        return value

    @field_validator("multifactor", mode="before")
    @classmethod
    def _none_is_false(cls, value: object) -> object:
        return False if value is None else value


class IdmeAttributeStatement(AttributeStatement):
    level_of_assurance: int | None = None


class MhvProfile(SamlBaseModel):
    account_type: AccountType = Field(default=AccountType.NONE, alias="accountType")
    available_services: dict[str, str] = Field(default_factory=dict, alias="availableServices")


class MhvAttributeStatement(AttributeStatement):
    mhv_uuid: str | None = None
    mhv_icn: str | None = None
    mhv_profile: MhvProfile = Field(default_factory=MhvProfile)

    @field_validator("mhv_profile", mode="before")
    @classmethod
    def _parse_profile_json(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, str):
            return json.loads(value)
        return value


class DsLogonAttributeStatement(AttributeStatement):
    dslogon_uuid: str | None = None
    dslogon_assurance: str | None = None


class SamlResponsePayload(SamlBaseModel):
    """A captured, already signature-checked SAML response (e.g. from a JSON file)."""

    authn_context: str | None = None
    attributes: dict[str, list[str]] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)

    @field_validator("attributes", mode="before")
    @classmethod
    def _wrap_single_values(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        mapping_value = cast(Mapping[str, object], value)
        wrapped: dict[str, object] = {}
        for key, item in mapping_value.items():
            if item is None:
                wrapped[key] = []
            elif isinstance(item, str):
                wrapped[key] = [item]
            else:
                wrapped[key] = item
        return wrapped
