from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Sequence

from cdi_ui.tui.core.bases import PresenterBase
from cdi_ui.tui.core.protocols import (
    FilePicker,
    Form,
    Picker,
    PresenterSink,
    Progress,
    TablePresenter,
    UI,
)
from cdi_ui.tui.system.models import PickItem


@dataclass
class RecordedTable:
    title: str
    columns: list[str]
    rows: list[list[str]]


@dataclass
class HeadlessUI(UI):
    """Scripted UI: records output and replays queued answers.

    ``pick_ids`` are consumed one per pick; an empty queue picks the first
    item, and an id that is not listed (e.g. ``None``) cancels the pick.
    """

    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)
    recorded_picks: list[tuple[str, list[str]]] = field(default_factory=list)

    pick_ids: list[str | None] = field(default_factory=list)
    next_file: Path | None = None
    form_responses: list[str] = field(default_factory=list)
    next_form_response: str = "default"

    def __post_init__(self):
        self.picker = _HeadlessPicker(self)
        self.file_picker = _HeadlessFilePicker(self)
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)
        self.form = _HeadlessForm(self)
        self.progress = _HeadlessProgress(self)


class _HeadlessPicker(Picker):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def pick_one(
        self,
        items: Sequence[PickItem],
        *,
        title: str,
        query_hint: str = "",
        help_text: str = "",
    ) -> PickItem | None:
        self._ui.recorded_picks.append((title, [item.id for item in items]))
        if not self._ui.pick_ids:
            return items[0] if items else None
        wanted = self._ui.pick_ids.pop(0)
        for item in items:
            if item.id == wanted:
                return item
        return None


class _HeadlessFilePicker(FilePicker):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def pick_file(
        self,
        start: Path,
        *,
        title: str,
        allowed_extensions: Sequence[str] = (),
        show_hidden: bool = False,
        help_text: str = "",
    ) -> Path | None:
        self._ui.recorded_messages.append(f"FILE: {title} @ {start}")
        return self._ui.next_file


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        self._ui.recorded_tables.append(
            RecordedTable(title, list(columns), [list(r) for r in rows])
        )


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")

    def emit_panel(
        self,
        message: str,
        title: str | None,
        border_style: str | None,
    ) -> None:
        self._ui.recorded_messages.append(f"PANEL: {title} - {message}")

    def emit_rule(self, title: str) -> None:
        self._ui.recorded_messages.append(f"RULE: {title}")


class _HeadlessPresenter(PresenterBase):
    def __init__(self, ui: HeadlessUI) -> None:
        super().__init__(_HeadlessPresenterSink(ui))


class _HeadlessForm(Form):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def ask(self, prompt: str, default: str | None = None, password: bool = False) -> str:
        if self._ui.form_responses:
            return self._ui.form_responses.pop(0)
        return self._ui.next_form_response

    def wait(self, prompt: str) -> None:
        self._ui.recorded_messages.append(f"WAIT: {prompt}")


class _HeadlessProgress(Progress):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    @contextmanager
    def status(self, message: str) -> Iterator[Callable[[str], None]]:
        self._ui.recorded_messages.append(f"STATUS: {message}")

        def update(detail: str) -> None:
            self._ui.recorded_messages.append(f"STATUS: {message} {detail}")

        yield update
