from rich.console import Console

from cdi_ui.tui.core.protocols import (
    FilePicker,
    Form,
    Picker,
    Presenter,
    Progress,
    TablePresenter,
    UI,
)
from cdi_ui.tui.system.components.file_picker import DirectoryFilePicker
from cdi_ui.tui.system.components.form import RichForm
from cdi_ui.tui.system.components.picker import PowerPicker
from cdi_ui.tui.system.components.presenter import RichPresenter
from cdi_ui.tui.system.components.progress import RichProgress
from cdi_ui.tui.system.components.table import RichTablePresenter


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self.picker: Picker = PowerPicker()
        self.file_picker: FilePicker = DirectoryFilePicker()
        self.tables: TablePresenter = RichTablePresenter(self._console)
        self.present: Presenter = RichPresenter(self._console)
        self.form: Form = RichForm(self._console)
        self.progress: Progress = RichProgress(self._console)
