"""`cdi inspect`: preview what an import would do with a CSV file."""

from __future__ import annotations

from pathlib import Path

import typer

from cdi_app.importer import data_start_index, is_hex_string, read_rows
from cdi_app.models import ImportRecord
from cdi_common.errors import FileReadError
from cdi_ui.wiring.dependencies import UIContext


def build_preview_rows(rows: list[list[str]]) -> tuple[list[list[str]], int, int]:
    """Return table rows plus the create and skip counts."""
    table: list[list[str]] = []
    to_create = 0
    skipped = 0
    for index in range(data_start_index(rows), len(rows)):
        record = ImportRecord.from_row(rows[index])
        if record is None:
            skipped += 1
            table.append([str(index + 1), rows[index][0] if rows[index] else "", "", "", "skip"])
            continue
        to_create += 1
        action = "create" if is_hex_string(record.dev_eui) else "create (devEui not hex)"
        table.append([str(index + 1), record.dev_eui, record.name, record.description, action])
    return table, to_create, skipped


def register_inspect_command(app: typer.Typer, ctx: UIContext) -> None:
    @app.command("inspect")
    def inspect_command(
        file: Path = typer.Argument(..., help="CSV file with devEui,name,description rows."),
    ) -> None:
        """Show how a CSV file would be imported, without contacting the server."""
        ui = ctx.ui
        try:
            rows = read_rows(file)
        except FileReadError as exc:
            ui.present.error(str(exc))
            raise typer.Exit(1)

        if data_start_index(rows):
            ui.present.info(f"Header row detected: {', '.join(rows[0])}")
        table, to_create, skipped = build_preview_rows(rows)
        ui.tables.show(
            f"Import preview: {file.name}",
            ["Row", "DevEUI", "Name", "Description", "Action"],
            table,
        )
        ui.present.success(f"{to_create} devices would be created, {skipped} rows skipped")
