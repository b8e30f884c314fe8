"""Text content of each wizard screen, independent of styling."""

from __future__ import annotations

from dataclasses import dataclass

from cdi_app.wizard import WizardModel, WizardState

APP_TITLE = "ChirpStack Device Manager"
LIST_HELP = "↑/↓: navigate • Enter: select • Esc: quit"
TERMINAL_HELP = "Press Enter to quit"

_LIST_TITLES = {
    WizardState.TENANT_SELECT: "Select Tenant",
    WizardState.APPLICATION_SELECT: "Select Application",
    WizardState.DEVICE_PROFILE_SELECT: "Select Device Profile",
}


@dataclass(frozen=True)
class WizardScreen:
    title: str
    body: str
    help: str


def build_screen(model: WizardModel) -> WizardScreen:
    state = model.state
    if state is WizardState.CONNECTING:
        return WizardScreen(
            APP_TITLE,
            "Enter your ChirpStack API token",
            "Press Enter to connect • Ctrl+C to quit",
        )
    if state in _LIST_TITLES:
        return WizardScreen(APP_TITLE, _LIST_TITLES[state], LIST_HELP)
    if state is WizardState.FILE_SELECT:
        return WizardScreen(
            "Select CSV File",
            "Choose the CSV file with devEui,name,description rows",
            "Navigate and press Enter to select • ←: parent directory • Esc: quit",
        )
    if state is WizardState.PROCESSING:
        return WizardScreen("Processing...", "Creating devices from CSV file...", "")
    if state is WizardState.COMPLETE:
        return WizardScreen(
            "Complete!",
            f"Successfully created {model.created} devices",
            TERMINAL_HELP,
        )
    return WizardScreen("Error", f"Error: {model.error}", TERMINAL_HELP)
