"""CLI wiring tests driven through typer's CliRunner with a headless UI."""

from __future__ import annotations

import importlib
from pathlib import Path

import grpc
import pytest
from typer.testing import CliRunner

from cdi_ui.cli import app, ctx_store
from cdi_ui.cli.commands.inspect import build_preview_rows
from cdi_ui.tui.system.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui

cli_main = importlib.import_module("cdi_ui.cli.main")
importer_cmd = importlib.import_module("cdi_ui.cli.commands.importer")

CSV = "devEui,name,description\n04ABEF0123456789,sensor-1,hall\nnot-hex,sensor-2\n04ABEF01\n"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def headless_ui(monkeypatch, tmp_path) -> HeadlessUI:
    for key in ("CDI_SERVER", "CDI_PAGE_LIMIT", "CDI_CONNECT_TIMEOUT", "CDI_API_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CDI_START_DIR", str(tmp_path))
    monkeypatch.setattr(cli_main, "configure_logging", lambda **_: None)
    monkeypatch.setattr(importer_cmd, "supports_fullscreen_ui", lambda: True)
    ui = HeadlessUI()
    monkeypatch.setattr(ctx_store, "_ui", ui)
    return ui


@pytest.fixture
def connected(monkeypatch, fake_service):
    connects: list[tuple[str, str, float]] = []

    def connector(address: str, token: str, timeout: float):
        connects.append((address, token, timeout))
        return fake_service

    monkeypatch.setattr(ctx_store, "_connector", connector)
    return connects


def test_preview_rows_mark_actions() -> None:
    rows = [["devEui", "name"], ["04ABEF01", "a", "desc"], ["zz", "b"], ["04ABEF02"]]

    table, to_create, skipped = build_preview_rows(rows)

    assert table == [
        ["2", "04ABEF01", "a", "desc", "create"],
        ["3", "zz", "b", "", "create (devEui not hex)"],
        ["4", "04ABEF02", "", "", "skip"],
    ]
    assert (to_create, skipped) == (2, 1)


def test_inspect_prints_preview_table(runner, headless_ui, write_csv) -> None:
    result = runner.invoke(app, ["inspect", write_csv(CSV)])

    assert result.exit_code == 0, result.output
    table = headless_ui.recorded_tables[0]
    assert table.title == "Import preview: devices.csv"
    assert table.columns == ["Row", "DevEUI", "Name", "Description", "Action"]
    assert len(table.rows) == 3
    assert "INFO: Header row detected: devEui, name, description" in headless_ui.recorded_messages
    assert "SUCCESS: 2 devices would be created, 1 rows skipped" in headless_ui.recorded_messages


def test_inspect_missing_file_exits_nonzero(runner, headless_ui, tmp_path) -> None:
    result = runner.invoke(app, ["inspect", str(tmp_path / "missing.csv")])

    assert result.exit_code == 1
    assert any(m.startswith("ERROR:") for m in headless_ui.recorded_messages)


def test_bare_invocation_runs_wizard(runner, headless_ui, connected, fake_service, write_csv) -> None:
    headless_ui.form_responses = ["secret"]
    headless_ui.next_file = Path(write_csv(CSV))

    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    assert connected == [("localhost:8081", "secret", 5.0)]
    assert [rec.dev_eui for rec, _, _ in fake_service.created] == ["04ABEF0123456789", "not-hex"]
    assert fake_service.close_count == 1


def test_import_options_reach_connector(runner, headless_ui, connected) -> None:
    headless_ui.pick_ids = [None]

    result = runner.invoke(
        app,
        ["import", "--server", "cs:9000", "--connect-timeout", "0", "--token", "tok"],
    )

    assert result.exit_code == 0, result.output
    assert connected == [("cs:9000", "tok", 0.0)]


def test_token_can_come_from_environment(runner, headless_ui, connected, monkeypatch) -> None:
    monkeypatch.setenv("CDI_API_TOKEN", "env-token")
    headless_ui.pick_ids = [None]

    result = runner.invoke(app, ["import"])

    assert result.exit_code == 0, result.output
    assert connected[0][1] == "env-token"


def test_error_state_exits_with_one(runner, headless_ui, connected, fake_service, rpc_error) -> None:
    fake_service.list_error = rpc_error(grpc.StatusCode.UNAUTHENTICATED, "invalid token")

    result = runner.invoke(app, ["import", "--token", "bad"])

    assert result.exit_code == 1
    assert any(m.startswith("PANEL: Error - Error: ") for m in headless_ui.recorded_messages)


def test_missing_tty_is_reported(runner, headless_ui, connected, monkeypatch) -> None:
    monkeypatch.setattr(importer_cmd, "supports_fullscreen_ui", lambda: False)

    result = runner.invoke(app, ["import", "--token", "tok"])

    assert result.exit_code == 1
    assert connected == []
    assert "ERROR: The import wizard requires an interactive terminal (TTY)." in headless_ui.recorded_messages


def test_invalid_settings_exit_with_two(runner, headless_ui, connected, monkeypatch) -> None:
    monkeypatch.setenv("CDI_PAGE_LIMIT", "500")

    result = runner.invoke(app, ["import", "--token", "tok"])

    assert result.exit_code == 2
    assert connected == []
    assert any("Invalid importer settings" in m for m in headless_ui.recorded_messages)
