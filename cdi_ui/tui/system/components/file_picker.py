"""Directory browser that returns a single file with an allowed extension."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from prompt_toolkit.key_binding import KeyBindings
from rich.text import Text

from cdi_ui.tui.core.protocols import FilePicker
from cdi_ui.tui.system.components.flat_picker_panel import (
    FlatPickerPanel,
    FlatPickerPanelConfig,
)
from cdi_ui.tui.system.components.picker import bind_navigation, picker_application
from cdi_ui.tui.system.models import PickItem

PARENT_ID = ".."


def list_directory(
    directory: Path,
    allowed_extensions: Sequence[str] = (),
    show_hidden: bool = False,
) -> list[PickItem]:
    """Entries of ``directory``: parent link, sub-directories, then matching files.

    Unreadable directories yield only the parent link.
    """
    items: list[PickItem] = []
    if directory.parent != directory:
        items.append(
            PickItem(
                id=PARENT_ID,
                title="../",
                tags=("dir",),
                payload=directory.parent,
                description=str(directory.parent),
            )
        )
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name.lower())
    except OSError:
        return items

    allowed = {ext.lower() for ext in allowed_extensions}
    dirs: list[PickItem] = []
    files: list[PickItem] = []
    for entry in entries:
        if not show_hidden and entry.name.startswith("."):
            continue
        try:
            is_dir = entry.is_dir()
        except OSError:
            continue
        if is_dir:
            dirs.append(
                PickItem(
                    id=str(entry),
                    title=f"{entry.name}/",
                    tags=("dir",),
                    payload=entry,
                    search_blob=entry.name,
                )
            )
        elif not allowed or entry.suffix.lower() in allowed:
            files.append(
                PickItem(
                    id=str(entry),
                    title=entry.name,
                    tags=("file",),
                    payload=entry,
                    search_blob=entry.name,
                )
            )
    return items + dirs + files


def _is_dir(item: PickItem) -> bool:
    return "dir" in item.tags


class _FileBrowserApp:
    """Directory browser: Enter opens a directory or returns a file."""

    def __init__(
        self,
        start: Path,
        *,
        title: str,
        allowed_extensions: Sequence[str] = (),
        show_hidden: bool = False,
        help_text: str = "",
    ) -> None:
        self.cwd = start.expanduser().resolve()
        self.allowed_extensions = tuple(allowed_extensions)
        self.show_hidden = show_hidden
        self._panel = FlatPickerPanel(
            list_directory(self.cwd, self.allowed_extensions, show_hidden),
            row_renderer=self._render_row,
            preview_renderer=self._preview,
            config=FlatPickerPanelConfig(enable_fuzzy=False),
        )
        self.search = self._panel.search

        kb = KeyBindings()
        bind_navigation(kb, self._panel)

        @kb.add("enter")
        def _(event: Any) -> None:
            chosen = self.activate()
            if chosen is not None:
                event.app.exit(result=chosen)
            else:
                event.app.invalidate()

        @kb.add("left")
        def _(event: Any) -> None:
            if not self.search.text and self.cwd.parent != self.cwd:
                self.change_directory(self.cwd.parent)
                event.app.invalidate()

        self.app = picker_application(
            self._panel,
            kb,
            title=title,
            help_text=help_text,
            header=lambda: [("class:path", str(self.cwd))],
            list_weight=2,
        )
        self.search.buffer.on_text_changed += self._on_search_changed

    def _on_search_changed(self, _buffer: Any) -> None:
        self._panel.apply_filter()
        self.app.invalidate()

    @staticmethod
    def _render_row(item: PickItem, is_selected: bool) -> tuple[str, str]:
        line = f" {'▸' if is_selected else ' '} {item.title}"
        if is_selected:
            return "class:selected", line
        return ("class:directory" if _is_dir(item) else ""), line

    @staticmethod
    def _preview(item: PickItem) -> object | None:
        path: Path = item.payload
        if _is_dir(item):
            return Text(f"Directory\n{path}", style="bold")
        try:
            size = path.stat().st_size
        except OSError:
            return Text(str(path))
        text = Text(path.name, style="bold")
        text.append(f"\n{size} bytes", style="dim")
        return text

    def change_directory(self, directory: Path) -> None:
        self.cwd = directory
        self._panel.set_items(
            list_directory(directory, self.allowed_extensions, self.show_hidden)
        )

    def activate(self) -> Path | None:
        """Enter on the highlighted row: descend into a directory or return a file."""
        item = self._panel.selected_item
        if item is None:
            return None
        if _is_dir(item):
            self.change_directory(item.payload)
            return None
        return item.payload

    def run(self) -> Path | None:
        return self.app.run()


class DirectoryFilePicker(FilePicker):
    def pick_file(
        self,
        start: Path,
        *,
        title: str,
        allowed_extensions: Sequence[str] = (),
        show_hidden: bool = False,
        help_text: str = "",
    ) -> Path | None:
        return _FileBrowserApp(
            start,
            title=title,
            allowed_extensions=allowed_extensions,
            show_hidden=show_hidden,
            help_text=help_text,
        ).run()
