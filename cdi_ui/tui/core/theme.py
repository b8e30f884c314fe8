from __future__ import annotations

from typing import Mapping

RICH_ACCENT = "#7D56F4"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT
STATUS_STYLE = "#F25D94"
HELP_STYLE = "#626262"

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

# Border colour of the screen panel per wizard state value.
STATE_BORDER_STYLES: dict[str, str] = {
    "complete": "green",
    "error": "red",
    "processing": STATUS_STYLE,
}


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def help_text(text: str) -> str:
    return f"[{HELP_STYLE}]{text}[/{HELP_STYLE}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def border_style_for(state: str) -> str:
    return STATE_BORDER_STYLES.get(state, RICH_BORDER_STYLE)


def prompt_toolkit_picker_style() -> Mapping[str, str]:
    return {
        "selected": "bg:#7D56F4 fg:#FAFAFA bold",
        "separator": "fg:#7D56F4",
        "frame.border": "fg:#7D56F4",
        "frame.label": "fg:#7D56F4 bold",
        "search": "bg:#eeeeee fg:#000000",
        "directory": "fg:#7D56F4 bold",
        "path": "fg:blue bold underline",
        "help": "fg:#626262",
    }
