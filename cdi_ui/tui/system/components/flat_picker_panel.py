"""Search box + list + preview building block for prompt_toolkit pickers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeAlias

from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.widgets import TextArea
from rapidfuzz import fuzz, process
from rich.console import Console
from rich.text import Text

from cdi_ui.tui.system.models import PickItem

RowRenderer: TypeAlias = Callable[[PickItem, bool], tuple[str, str]]
PreviewRenderer: TypeAlias = Callable[[PickItem], object | None]

EMPTY_LIST_TEXT = "  (nothing to show)"


@dataclass(frozen=True)
class FlatPickerPanelConfig:
    enable_fuzzy: bool = True
    fuzzy_limit: int = 200
    fuzzy_score_cutoff: int = 50


def filter_items(
    items: Sequence[PickItem],
    query: str,
    config: FlatPickerPanelConfig | None = None,
) -> list[PickItem]:
    """Items matching ``query``; an empty query keeps the given order.

    With fuzzy matching the result is ranked by rapidfuzz ``WRatio``;
    otherwise it is a case-insensitive substring match on the search blob,
    title and description.
    """
    cfg = config or FlatPickerPanelConfig()
    query = query.strip()
    if not query:
        return list(items)
    if cfg.enable_fuzzy:
        ranked = process.extract(
            query,
            [item.match_text for item in items],
            scorer=fuzz.WRatio,
            limit=cfg.fuzzy_limit,
            score_cutoff=cfg.fuzzy_score_cutoff,
        )
        return [items[index] for _match, _score, index in ranked]
    needle = query.lower()
    return [
        item
        for item in items
        if needle in f"{item.match_text}\n{item.description}".lower()
    ]


def _default_preview(item: PickItem) -> object | None:
    text = Text(item.title, style="bold")
    if item.description:
        text.append(f"\n{item.description}")
    text.append(f"\nid: {item.id}", style="dim")
    return text


class FlatPickerPanel:
    """Owns the filtered view and the highlighted row of a picker.

    There is no Application here: the owning picker binds keys, lays out
    ``search``, ``list_control`` and ``preview_control``, and invalidates.
    """

    def __init__(
        self,
        items: Sequence[PickItem],
        *,
        row_renderer: RowRenderer,
        preview_renderer: PreviewRenderer | None = None,
        search_prompt: str = "Search: ",
        config: FlatPickerPanelConfig | None = None,
    ) -> None:
        self._config = config or FlatPickerPanelConfig()
        self._row_renderer = row_renderer
        self._preview_renderer = preview_renderer or _default_preview
        self._console = Console(force_terminal=True)
        self._items = list(items)
        self._filtered = list(self._items)
        self._cursor = 0

        self.search = TextArea(
            height=1, prompt=search_prompt, style="class:search", multiline=False
        )
        self.list_control = FormattedTextControl(self._list_fragments, focusable=True)
        self.preview_control = FormattedTextControl(self._preview_ansi)

    @property
    def items(self) -> list[PickItem]:
        return self._items

    @property
    def filtered(self) -> list[PickItem]:
        return self._filtered

    @property
    def selected_index(self) -> int:
        return self._cursor

    @selected_index.setter
    def selected_index(self, value: int) -> None:
        last = max(len(self._filtered) - 1, 0)
        self._cursor = min(max(value, 0), last)

    @property
    def selected_item(self) -> PickItem | None:
        if not self._filtered:
            return None
        return self._filtered[self._cursor]

    def apply_filter(self) -> None:
        """Re-run the search text against the items and highlight the first hit."""
        self._filtered = filter_items(self._items, self.search.text, self._config)
        self._cursor = 0

    def set_items(self, items: Sequence[PickItem]) -> None:
        """Swap in a new item list; the search text is cleared."""
        self._items = list(items)
        self.search.text = ""
        self.apply_filter()

    def move(self, delta: int) -> None:
        self.selected_index = self._cursor + delta

    def _list_fragments(self) -> list[tuple[str, str]]:
        if not self._filtered:
            return [("class:help", f"{EMPTY_LIST_TEXT}\n")]
        fragments = []
        for index, item in enumerate(self._filtered):
            style, line = self._row_renderer(item, index == self._cursor)
            fragments.append((style, line.rstrip("\n") + "\n"))
        return fragments

    def _preview_ansi(self) -> ANSI:
        item = self.selected_item
        renderable = self._preview_renderer(item) if item is not None else None
        if renderable is None:
            return ANSI("")
        with self._console.capture() as capture:
            self._console.print(renderable)
        return ANSI(capture.get())
