from rich.console import Console
from rich.prompt import Prompt

from cdi_ui.tui.core import theme
from cdi_ui.tui.core.protocols import Form


class RichForm(Form):
    def __init__(self, console: Console):
        self._console = console

    def ask(self, prompt: str, default: str | None = None, password: bool = False) -> str:
        kwargs = {}
        if default is not None:
            kwargs["default"] = default
        if password:
            kwargs["password"] = True
        return Prompt.ask(prompt, console=self._console, **kwargs)

    def wait(self, prompt: str) -> None:
        self._console.input(theme.help_text(prompt) + " ")
