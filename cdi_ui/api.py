"""Stable UI API surface."""

from __future__ import annotations

from cdi_ui.cli import app, ctx_store, main
from cdi_ui.flows.import_wizard import run_import_wizard
from cdi_ui.presenters.wizard import WizardScreen, build_screen
from cdi_ui.tui.system.headless import HeadlessUI
from cdi_ui.tui.system.models import PickItem

__all__ = [
    "app",
    "main",
    "ctx_store",
    "run_import_wizard",
    "build_screen",
    "WizardScreen",
    "HeadlessUI",
    "PickItem",
]
