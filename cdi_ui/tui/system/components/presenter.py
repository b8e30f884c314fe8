from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule

from cdi_ui.tui.core import theme
from cdi_ui.tui.core.bases import PresenterBase
from cdi_ui.tui.core.protocols import PresenterSink


class _RichPresenterSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        self._console.print(theme.presenter_message(level, message))

    def emit_panel(
        self,
        message: str,
        title: str | None,
        border_style: str | None,
    ) -> None:
        self._console.print(
            Panel(
                message,
                title=theme.panel_title(title) if title else None,
                border_style=border_style or theme.RICH_BORDER_STYLE,
                padding=(1, 2),
            )
        )

    def emit_rule(self, title: str) -> None:
        self._console.print(Rule(title, style=theme.RICH_BORDER_STYLE))


class RichPresenter(PresenterBase):
    def __init__(self, console: Console) -> None:
        super().__init__(_RichPresenterSink(console))
