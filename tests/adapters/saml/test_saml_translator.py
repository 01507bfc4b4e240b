from __future__ import annotations

import json

import pytest

from benefits_sso.adapters.saml import (
    AttributeExtractionError,
    UnknownAuthnContextError,
    parse_identity_attributes,
)
from benefits_sso.domain.model import AccountType, AuthnContext, CorrelationIds

ADVANCED_PROFILE = json.dumps(
    {"accountType": "Advanced", "availableServices": {"1": "Blue Button self entered data."}}
)
PREMIUM_PROFILE = json.dumps(
    {
        "accountType": "Premium",
        "availableServices": {"21": "VA Medications", "4": "Secure Messaging"},
    }
)


def _mhv_attributes(profile: str, *, multifactor: str = "true") -> dict[str, list[str]]:
    return {
        "mhv_icn": ["1012853550V207686"],
        "mhv_profile": [profile],
        "mhv_uuid": ["12345748"],
        "email": ["kam+tristanmhv@adhocteam.us"],
        "multifactor": [multifactor],
        "uuid": ["0e1bb5723d7c4f0686f46ca4505642ad"],
        "level_of_assurance": [],
    }


def test_mhv_advanced_account_is_loa1() -> None:
    attributes = parse_identity_attributes("myhealthevet", _mhv_attributes(ADVANCED_PROFILE))

    assert attributes.principal_id == "0e1bb5723d7c4f0686f46ca4505642ad"
    assert attributes.email == "kam+tristanmhv@adhocteam.us"
    assert attributes.loa == {"current": 1, "highest": 1}
    assert attributes.account_type is AccountType.ADVANCED
    assert attributes.correlation_ids == CorrelationIds(
        mhv_correlation_id="12345748",
        mhv_icn="1012853550V207686",
    )
    assert attributes.multifactor_asserted is True
    assert attributes.authn_context is AuthnContext.MHV
    assert not attributes.changing_multifactor


def test_mhv_premium_account_is_loa3() -> None:
    attributes = parse_identity_attributes(
        "myhealthevet", _mhv_attributes(PREMIUM_PROFILE, multifactor="false")
    )

    assert attributes.loa == {"current": 3, "highest": 3}
    assert attributes.account_type is AccountType.PREMIUM
    assert attributes.multifactor_asserted is False


@pytest.mark.parametrize("profile", [ADVANCED_PROFILE, PREMIUM_PROFILE])
def test_mhv_multifactor_context_is_changing_multifactor(profile: str) -> None:
    attributes = parse_identity_attributes("myhealthevet_multifactor", _mhv_attributes(profile))

    assert attributes.changing_multifactor


def test_mhv_without_profile_has_no_account_type() -> None:
    raw = _mhv_attributes(ADVANCED_PROFILE)
    del raw["mhv_profile"]

    attributes = parse_identity_attributes("myhealthevet", raw)

    assert attributes.account_type is AccountType.NONE
    assert attributes.loa == {"current": 1, "highest": 1}


@pytest.mark.parametrize(
    ("context", "level_of_assurance", "expected"),
    [
        ("http://idmanagement.gov/ns/assurance/loa/1/vets", ["3"], {"current": 1, "highest": 3}),
        ("http://idmanagement.gov/ns/assurance/loa/1/vets", [], {"current": 1, "highest": 1}),
        ("http://idmanagement.gov/ns/assurance/loa/3/vets", ["3"], {"current": 3, "highest": 3}),
        ("http://idmanagement.gov/ns/assurance/loa/3/vets", ["1"], {"current": 3, "highest": 3}),
        ("myhealthevet_loa3", [], {"current": 3, "highest": 3}),
        ("dslogon_loa3", ["3"], {"current": 3, "highest": 3}),
        ("multifactor", ["9"], {"current": 1, "highest": 3}),
    ],
)
def test_idme_loa_rules(
    context: str,
    level_of_assurance: list[str],
    expected: dict[str, int],
) -> None:
    attributes = parse_identity_attributes(
        context,
        {
            "uuid": ["U1"],
            "email": ["person@example.com"],
            "multifactor": ["true"],
            "level_of_assurance": level_of_assurance,
        },
    )

    assert attributes.loa == expected


@pytest.mark.parametrize(
    ("assurance", "expected"),
    [("1", 1), ("2", 3), ("3", 3), (None, 1)],
)
def test_dslogon_assurance_maps_to_loa(assurance: str | None, expected: int) -> None:
    raw: dict[str, list[str]] = {
        "uuid": ["U1"],
        "email": ["person@example.com"],
        "dslogon_uuid": ["1606997570"],
    }
    if assurance is not None:
        raw["dslogon_assurance"] = [assurance]

    attributes = parse_identity_attributes("dslogon", raw)

    assert attributes.loa == {"current": expected, "highest": expected}
    assert attributes.correlation_ids == CorrelationIds(dslogon_edipi="1606997570")
    assert attributes.multifactor_asserted is False


def test_blank_values_are_treated_as_absent() -> None:
    attributes = parse_identity_attributes(
        "myhealthevet",
        {"uuid": ["U1"], "email": ["  "], "mhv_uuid": [""], "mhv_profile": [ADVANCED_PROFILE]},
    )

    assert attributes.email is None
    assert attributes.correlation_ids.mhv_correlation_id is None


@pytest.mark.parametrize("context", [None, "", "saml_magic"])
def test_unknown_context_is_rejected(context: str | None) -> None:
    with pytest.raises(UnknownAuthnContextError):
        parse_identity_attributes(context, {"uuid": ["U1"]})


def test_missing_uuid_is_an_extraction_error() -> None:
    with pytest.raises(AttributeExtractionError, match="idme"):
        parse_identity_attributes(
            "http://idmanagement.gov/ns/assurance/loa/1/vets", {"email": ["person@example.com"]}
        )


def test_malformed_mhv_profile_is_an_extraction_error() -> None:
    with pytest.raises(AttributeExtractionError):
        parse_identity_attributes("myhealthevet", {"uuid": ["U1"], "mhv_profile": ["{not json"]})
