from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from benefits_sso.adapters.saml import SamlResponse
from benefits_sso.domain.model import Session, Severity
from benefits_sso.domain.reconciliation import (
    FailureCategory,
    FailureDiagnostic,
    ReconciliationResult,
)
from benefits_sso.ui import cli as cli_module
from tests.helpers.sign_in import FIXED_NOW

if TYPE_CHECKING:
    from pathlib import Path


def _snapshot(tmp_path: Path, payload: object) -> str:
    path = tmp_path / "response.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_reconcile_prints_session_and_exits_zero(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    captured: list[SamlResponse] = []

    def fake_authenticate(response: SamlResponse) -> ReconciliationResult:
        captured.append(response)
        return ReconciliationResult(
            success=True,
            session=Session(principal_id="U1", token="tok", created_at=FIXED_NOW),
        )

    monkeypatch.setattr(cli_module, "authenticate", fake_authenticate)
    path = _snapshot(tmp_path, {"authn_context": "dslogon", "attributes": {"uuid": ["U1"]}})

    exit_code = cli_module.main(["reconcile", path])

    assert exit_code == 0
    assert captured[0].authn_context == "dslogon"
    assert captured[0].attributes == {"uuid": ("U1",)}
    assert json.loads(capsys.readouterr().out) == {
        "success": True,
        "is_new_login": False,
        "principal_id": "U1",
        "session_token": "tok",
    }


def test_reconcile_failure_exits_one(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def fake_authenticate(_response: SamlResponse) -> ReconciliationResult:
        return ReconciliationResult(
            success=False,
            diagnostic=FailureDiagnostic(
                category=FailureCategory.ASSERTION_INVALID,
                code="001",
                tag="clicked_deny",
                severity=Severity.WARNING,
                message="Login Fail! Subject did not consent to attribute release",
            ),
        )

    monkeypatch.setattr(cli_module, "authenticate", fake_authenticate)
    path = _snapshot(tmp_path, {"errors": ["Subject did not consent to attribute release"]})

    exit_code = cli_module.main(["reconcile", path])

    assert exit_code == 1
    summary = json.loads(capsys.readouterr().out)
    assert summary["failure_code"] == "001"
    assert summary["instrumentation_tag"] == "error:clicked_deny"


def test_reconcile_rejects_missing_file(tmp_path: Path) -> None:
    assert cli_module.main(["reconcile", str(tmp_path / "absent.json")]) == 2


def test_reconcile_rejects_malformed_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "response.json"
    path.write_text('{"attributes": ["not", "a", "mapping"]}')

    assert cli_module.main(["reconcile", str(path)]) == 2


def test_reconcile_storage_error_exits_one(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    def fake_authenticate(_response: SamlResponse) -> ReconciliationResult:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(cli_module, "authenticate", fake_authenticate)

    assert cli_module.main(["reconcile", _snapshot(tmp_path, {})]) == 1


def test_init_db_applies_migrations(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_initialize_database(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "initialize_database", fake_initialize_database)

    assert cli_module.main(["init-db", "--database-uri", "sqlite:///custom.db"]) == 0
    assert captured == {"database_uri": "sqlite:///custom.db"}


def test_unknown_command_is_invalid_input() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["export"])

    assert excinfo.value.code == 2
