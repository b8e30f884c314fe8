"""`cdi import`: run the bulk registration wizard."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from cdi_app.config import ImporterSettings
from cdi_app.wizard import WizardState
from cdi_common.errors import ConfigurationError
from cdi_ui.flows.errors import UIFlowError
from cdi_ui.flows.import_wizard import run_import_wizard
from cdi_ui.tui.core.capabilities import supports_fullscreen_ui
from cdi_ui.wiring.dependencies import UIContext

logger = logging.getLogger(__name__)


def run_import(
    ctx: UIContext,
    *,
    server: Optional[str] = None,
    start_dir: Optional[Path] = None,
    connect_timeout: Optional[float] = None,
    token: Optional[str] = None,
) -> int:
    """Run the wizard and map its final state to an exit code."""
    ui = ctx.ui
    try:
        if not ctx.headless and not supports_fullscreen_ui():
            raise UIFlowError.requires_tty()
        settings = ImporterSettings.from_env(
            server_address=server,
            start_directory=start_dir,
            connect_timeout=connect_timeout,
        )
    except (UIFlowError, ConfigurationError) as exc:
        ui.present.error(str(exc))
        return getattr(exc, "exit_code", 2)

    controller = ctx.build_controller(settings)
    model = run_import_wizard(ui, controller, token=token)
    if model.state is WizardState.ERROR:
        return 1
    return 0


def register_import_command(app: typer.Typer, ctx: UIContext) -> None:
    @app.command("import")
    def import_devices_command(
        server: Optional[str] = typer.Option(
            None,
            "--server",
            "-s",
            help="ChirpStack gRPC address (host:port). Defaults to CDI_SERVER or localhost:8081.",
        ),
        start_dir: Optional[Path] = typer.Option(
            None,
            "--start-dir",
            help="Directory the CSV file browser opens in (default: home).",
        ),
        connect_timeout: Optional[float] = typer.Option(
            None,
            "--connect-timeout",
            min=0,
            help="Seconds to wait for the server; 0 connects lazily.",
        ),
        token: Optional[str] = typer.Option(
            None,
            "--token",
            envvar="CDI_API_TOKEN",
            help="API token; prompted for when omitted.",
        ),
    ) -> None:
        """Register devices from a CSV file, one device per row."""
        code = run_import(
            ctx,
            server=server,
            start_dir=start_dir,
            connect_timeout=connect_timeout,
            token=token,
        )
        if code:
            raise typer.Exit(code)
