"""Full-screen single-choice picker used by the tenant/application/profile steps."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import AnyContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from cdi_ui.tui.core import theme
from cdi_ui.tui.core.protocols import Picker
from cdi_ui.tui.system.components.flat_picker_panel import FlatPickerPanel
from cdi_ui.tui.system.models import PickItem

CANCEL_KEYS = ("escape", "c-c", "c-q")


def picker_application(
    panel: FlatPickerPanel,
    key_bindings: KeyBindings,
    *,
    title: str,
    help_text: str = "",
    header: Callable[[], list[tuple[str, str]]] | None = None,
    list_weight: int = 1,
) -> Application:
    """Frame ``panel`` as search / list | preview / help and wrap it in an app.

    Focus starts in the search box so typing filters right away.
    """
    rows: list[AnyContainer] = []
    if header is not None:
        rows.append(Window(height=1, content=FormattedTextControl(header)))
    rows += [
        panel.search,
        Window(height=1, char="-", style="class:separator"),
        VSplit(
            [
                Window(panel.list_control, width=Dimension(weight=list_weight)),
                Window(width=1, char="|", style="class:separator"),
                Window(panel.preview_control, width=Dimension(weight=1)),
            ],
            padding=1,
        ),
        Window(height=1, content=FormattedTextControl([("class:help", help_text)])),
    ]
    return Application(
        layout=Layout(Frame(HSplit(rows), title=title), focused_element=panel.search),
        key_bindings=key_bindings,
        style=Style.from_dict(dict(theme.prompt_toolkit_picker_style())),
        full_screen=True,
    )


def bind_navigation(kb: KeyBindings, panel: FlatPickerPanel) -> None:
    """Up/down move the highlight; the cancel keys exit with ``None``."""

    @kb.add("down")
    def _(event: Any) -> None:
        panel.move(1)
        event.app.invalidate()

    @kb.add("up")
    def _(event: Any) -> None:
        panel.move(-1)
        event.app.invalidate()

    for key in CANCEL_KEYS:
        kb.add(key)(lambda event: _exit_once(event.app, None))


def _exit_once(app: Application, result: Any) -> None:
    # Repeated Enter/Esc while the app is shutting down would raise.
    if not app.future or app.future.done():
        return
    app.exit(result=result)


class _PickerApp:
    """Single-choice list with fuzzy search."""

    def __init__(
        self,
        items: Sequence[PickItem],
        title: str,
        query_hint: str = "",
        help_text: str = "",
    ) -> None:
        self._panel = FlatPickerPanel(list(items), row_renderer=self._render_row)
        self.search = self._panel.search
        if query_hint:
            self.search.text = query_hint
            self._panel.apply_filter()

        kb = KeyBindings()
        bind_navigation(kb, self._panel)

        @kb.add("enter")
        def _(event: Any) -> None:
            item = self.confirm()
            if item is not None:
                _exit_once(event.app, item)

        self.app = picker_application(self._panel, kb, title=title, help_text=help_text)
        self.search.buffer.on_text_changed += self._on_search_changed

    def _on_search_changed(self, _buffer: Any) -> None:
        self._panel.apply_filter()
        self.app.invalidate()

    @property
    def filtered(self) -> list[PickItem]:
        return self._panel.filtered

    @property
    def index(self) -> int:
        return self._panel.selected_index

    @index.setter
    def index(self, value: int) -> None:
        self._panel.selected_index = value

    @staticmethod
    def _render_row(item: PickItem, is_selected: bool) -> tuple[str, str]:
        style = "class:selected" if is_selected else ""
        return style, f" {'▸' if is_selected else ' '} {item.title}"

    def confirm(self) -> PickItem | None:
        """What Enter returns right now; ``None`` means Enter does nothing."""
        return self._panel.selected_item

    def run(self) -> PickItem | None:
        return self.app.run()


class PowerPicker(Picker):
    def pick_one(
        self,
        items: Sequence[PickItem],
        *,
        title: str,
        query_hint: str = "",
        help_text: str = "",
    ) -> PickItem | None:
        return _PickerApp(items, title, query_hint=query_hint, help_text=help_text).run()
