"""Interactive flow: turns UI input into wizard events."""

from __future__ import annotations

import logging

from cdi_app.controller import WizardController
from cdi_app.models import ImportRecord, SelectionItem
from cdi_app.wizard import (
    CredentialSubmitted,
    FileChosen,
    ItemChosen,
    QuitRequested,
    SELECTION_STATES,
    WizardModel,
    WizardState,
)
from cdi_ui.presenters.wizard import build_screen
from cdi_ui.tui.core import theme
from cdi_ui.tui.core.protocols import UI
from cdi_ui.tui.system.models import PickItem

logger = logging.getLogger(__name__)


def _to_pick_items(items: tuple[SelectionItem, ...]) -> list[PickItem]:
    return [
        PickItem(
            id=item.id,
            title=item.title,
            description=item.description,
            search_blob=f"{item.title} {item.description}",
            payload=item,
        )
        for item in items
    ]


def _show_terminal(ui: UI, model: WizardModel) -> None:
    screen = build_screen(model)
    ui.present.panel(
        screen.body,
        title=screen.title,
        border_style=theme.border_style_for(model.state.value),
    )
    ui.form.wait(screen.help)


def _ask_token(ui: UI, prompt: str) -> str | None:
    try:
        return ui.form.ask(prompt, password=True)
    except (KeyboardInterrupt, EOFError):
        return None


def run_import_wizard(
    ui: UI,
    controller: WizardController,
    *,
    token: str | None = None,
) -> WizardModel:
    """Drive ``controller`` until the user quits; returns the final model.

    The session is always closed on the way out.
    """
    settings = controller.settings
    pending_token = token
    ui.present.rule(build_screen(controller.model).title)
    try:
        while True:
            model = controller.model
            screen = build_screen(model)

            if model.state.is_terminal:
                _show_terminal(ui, model)
                controller.dispatch(QuitRequested())
                return controller.model

            if model.state is WizardState.CONNECTING:
                value = pending_token
                pending_token = None
                if value is None:
                    value = _ask_token(ui, screen.body)
                if value is None:
                    controller.dispatch(QuitRequested())
                    return controller.model
                if not value:
                    ui.present.warning("The API token must not be empty.")
                    continue
                with ui.progress.status(f"Connecting to {settings.server_address}..."):
                    controller.dispatch(CredentialSubmitted(value))
                continue

            if model.state in SELECTION_STATES:
                if not model.items:
                    ui.present.warning(f"{screen.body}: nothing available to choose from.")
                picked = ui.picker.pick_one(
                    _to_pick_items(model.items),
                    title=screen.body,
                    help_text=screen.help,
                )
                if picked is None:
                    controller.dispatch(QuitRequested())
                    return controller.model
                ui.present.info(f"{screen.body}: {picked.title}")
                with ui.progress.status("Loading..."):
                    controller.dispatch(ItemChosen(picked.payload))
                continue

            if model.state is WizardState.FILE_SELECT:
                path = ui.file_picker.pick_file(
                    settings.start_directory,
                    title=screen.title,
                    allowed_extensions=settings.allowed_extensions,
                    show_hidden=settings.show_hidden,
                    help_text=screen.help,
                )
                if path is None:
                    controller.dispatch(QuitRequested())
                    return controller.model
                _import(ui, controller, str(path))
                continue

            # PROCESSING is only ever seen inside _import.
            logger.error("Unexpected wizard state %s", model.state.value)
            controller.dispatch(QuitRequested())
            return controller.model
    finally:
        controller.close()


def _import(ui: UI, controller: WizardController, path: str) -> None:
    screen = build_screen(WizardModel(state=WizardState.PROCESSING))
    ui.present.info(f"Importing devices from {path}")
    previous = controller.on_row
    with ui.progress.status(screen.body) as update:

        def on_row(row_number: int, record: ImportRecord, ok: bool) -> None:
            update(f"row {row_number}: {record.dev_eui}")
            if previous is not None:
                previous(row_number, record, ok)

        controller.on_row = on_row
        try:
            controller.dispatch(FileChosen(path))
        finally:
            controller.on_row = previous
