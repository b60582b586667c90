from __future__ import annotations

from typing import Any

import pytest

from groundtruth.domain.model import AssociationResult, Record, ReconcileResult
from groundtruth.domain.records import ZipCodeListing
from groundtruth.ui import cli


def test_associate_command_invokes_reconcile(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_associate(contact_id: str, zip_code_id: str) -> ReconcileResult:
        captured["args"] = (contact_id, zip_code_id)
        return ReconcileResult(succeeded=True)

    monkeypatch.setattr(cli, "associate_contact", fake_associate)

    cli.main(["associate", "--contact-id", "c1", "--zip-code-id", "z1"])

    assert captured["args"] == ("c1", "z1")


def test_associate_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_associate(*_: object) -> ReconcileResult:
        return ReconcileResult(succeeded=False, error=RuntimeError("boom"))

    monkeypatch.setattr(cli, "associate_contact", fake_associate)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["associate", "--contact-id", "c1", "--zip-code-id", "z1"])

    assert excinfo.value.code == 1


def test_disassociate_command(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_disassociate(contact_id: str, zip_code_id: str) -> AssociationResult:
        captured["args"] = (contact_id, zip_code_id)
        return AssociationResult(succeeded=True)

    monkeypatch.setattr(cli, "disassociate_contact", fake_disassociate)

    cli.main(["disassociate", "--contact-id", "c1", "--zip-code-id", "z1"])

    assert captured["args"] == ("c1", "z1")


def test_missing_configuration_exits_with_status_two(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("CUSTOM_OBJECT_TYPE", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["zip-codes"])

    assert excinfo.value.code == 2


def test_serve_refuses_to_start_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ACCESS_TOKEN", raising=False)
    monkeypatch.setenv("CUSTOM_OBJECT_TYPE", "2-12345")
    started: list[Any] = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: started.append(args))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["serve"])

    assert excinfo.value.code == 2
    assert started == []


def test_zip_codes_command_prints_listing(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    listing = ZipCodeListing(
        record=Record(
            id="z1",
            category="2-12345",
            properties={"name": "84101", "homeownership_rate": "65.4", "median_home_age": "38"},
        ),
        contact=Record(
            id="c1",
            category="contacts",
            properties={"firstname": "Ada", "lastname": "Lovelace"},
        ),
    )
    monkeypatch.setattr(cli, "fetch_zip_codes", lambda: [listing])

    cli.main(["zip-codes"])

    assert capsys.readouterr().out.strip() == "z1\t84101\t65.4\t38\tAda Lovelace"
