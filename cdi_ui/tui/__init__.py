"""Terminal UI building blocks (rich + prompt_toolkit) and a headless double."""

from cdi_ui.tui.core.protocols import UI
from cdi_ui.tui.system.facade import TUI
from cdi_ui.tui.system.headless import HeadlessUI
from cdi_ui.tui.system.models import PickItem

__all__ = ["UI", "TUI", "HeadlessUI", "PickItem"]
