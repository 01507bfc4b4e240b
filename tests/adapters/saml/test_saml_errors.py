from __future__ import annotations

from benefits_sso.adapters.saml import normalize_error, normalize_errors
from benefits_sso.domain.model import Severity


def test_known_errors_map_to_stable_codes() -> None:
    denied = normalize_error("Subject did not consent to attribute release")
    too_late = normalize_error(
        "Current time is on or after NotOnOrAfter condition (2024-03-01 12:00:00 UTC >= ...)"
    )
    too_early = normalize_error("Current time is earlier than NotBefore condition")

    assert (denied.code, denied.tag, denied.severity) == ("001", "clicked_deny", Severity.WARNING)
    assert (too_late.code, too_late.tag, too_late.severity) == (
        "002",
        "auth_too_late",
        Severity.WARNING,
    )
    assert (too_early.code, too_early.tag, too_early.severity) == (
        "003",
        "auth_too_early",
        Severity.ERROR,
    )


def test_unrecognised_error_uses_generic_code_and_keeps_detail() -> None:
    failure = normalize_error("Invalid Signature on SAML Response")

    assert failure.code == "007"
    assert failure.short_message == "Default generic identity provider error"
    assert failure.detail == "Invalid Signature on SAML Response"


def test_normalize_errors_keeps_order_and_drops_repeats() -> None:
    failures = normalize_errors(
        [
            "Invalid Signature on SAML Response",
            "Subject did not consent to attribute release",
            " Invalid Signature on SAML Response ",
            "The status code of the Response was not Success",
        ]
    )

    assert [failure.code for failure in failures] == ["007", "001", "007"]
    assert failures[2].detail == "The status code of the Response was not Success"
