from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cdi_app.config import ImporterSettings
from cdi_app.controller import Connector, WizardController
from cdi_common.api import configure_logging
from cdi_ui.tui.core.protocols import UI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False

    _ui: Optional[UI] = None
    _connector: Optional[Connector] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from cdi_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                from cdi_ui.tui.system.facade import TUI

                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def connector(self) -> Optional[Connector]:
        return self._connector

    @connector.setter
    def connector(self, value: Optional[Connector]):
        self._connector = value

    def build_controller(self, settings: ImporterSettings) -> WizardController:
        return WizardController(settings, connector=self._connector)


__all__ = [
    "UIContext",
    "configure_logging",
]
