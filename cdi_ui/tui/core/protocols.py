"""Structural interfaces the flows code against; TUI and HeadlessUI implement them."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, ContextManager, Protocol, Sequence

from cdi_ui.tui.system.models import PickItem


class Picker(Protocol):
    """Single choice from a list; None when the user cancels."""

    def pick_one(
        self,
        items: Sequence[PickItem],
        *,
        title: str,
        query_hint: str = "",
        help_text: str = "",
    ) -> PickItem | None: ...


class FilePicker(Protocol):
    """Browse from `start` and return one file, or None when cancelled."""

    def pick_file(
        self,
        start: Path,
        *,
        title: str,
        allowed_extensions: Sequence[str] = (),
        show_hidden: bool = False,
        help_text: str = "",
    ) -> Path | None: ...


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...

    def emit_panel(
        self, message: str, title: str | None, border_style: str | None
    ) -> None: ...

    def emit_rule(self, title: str) -> None: ...


class Presenter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def panel(
        self,
        message: str,
        title: str | None = None,
        border_style: str | None = None,
    ) -> None: ...

    def rule(self, title: str) -> None: ...


class Form(Protocol):
    def ask(
        self,
        prompt: str,
        default: str | None = None,
        password: bool = False,
    ) -> str: ...

    def wait(self, prompt: str) -> None:
        """Block until the user dismisses the screen."""
        ...


class Progress(Protocol):
    """Spinner around a blocking call; the yielded callable appends a detail."""

    def status(self, message: str) -> ContextManager[Callable[[str], None]]: ...


class TablePresenter(Protocol):
    def show(self, title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None: ...


class UI(Protocol):
    picker: Picker
    file_picker: FilePicker
    tables: TablePresenter
    present: Presenter
    form: Form
    progress: Progress
