"""
Command-line interface for chirpstack-device-importer.

`cdi` (or `cdi import`) starts the bulk registration wizard; `cdi inspect`
previews a CSV file offline.
"""

from __future__ import annotations

from typing import Optional

import typer

from cdi_ui.cli.commands.importer import register_import_command, run_import
from cdi_ui.cli.commands.inspect import register_inspect_command
from cdi_ui.wiring.dependencies import UIContext, configure_logging

ctx_store = UIContext()

app = typer.Typer(
    help="Bulk-register devices into ChirpStack from a CSV file.",
    no_args_is_help=False,
)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (default: CDI_LOG_LEVEL or WARNING).",
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file.",
    ),
    log_json: Optional[bool] = typer.Option(
        None,
        "--log-json/--no-log-json",
        help="Render logs as JSON.",
    ),
) -> None:
    """Global entry point: logging setup, then the wizard unless a command is given."""
    configure_logging(level=log_level, log_file=log_file, json=log_json, force=True)

    if ctx.invoked_subcommand is None:
        code = run_import(ctx_store)
        raise typer.Exit(code)


register_import_command(app, ctx_store)
register_inspect_command(app, ctx_store)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
