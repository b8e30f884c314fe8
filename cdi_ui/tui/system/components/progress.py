from contextlib import contextmanager
from typing import Callable, Iterator

from rich.console import Console

from cdi_ui.tui.core import theme
from cdi_ui.tui.core.protocols import Progress


class RichProgress(Progress):
    def __init__(self, console: Console):
        self._console = console

    @contextmanager
    def status(self, message: str) -> Iterator[Callable[[str], None]]:
        with self._console.status(message, spinner_style=theme.STATUS_STYLE) as status:

            def update(detail: str) -> None:
                status.update(f"{message} [dim]{detail}[/dim]")

            yield update
