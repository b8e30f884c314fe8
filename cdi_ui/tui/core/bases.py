from __future__ import annotations

from cdi_ui.tui.core.protocols import PresenterSink

LEVELS = ("info", "warning", "error", "success")


class PresenterBase:
    """Presenter front-end shared by the rich and headless UIs.

    Subclasses only supply the sink; every leveled call funnels through
    ``message`` so both UIs agree on the level names.
    """

    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def message(self, level: str, text: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"unknown presenter level: {level!r}")
        self._sink.emit(level, text)

    def info(self, message: str) -> None:
        self.message("info", message)

    def warning(self, message: str) -> None:
        self.message("warning", message)

    def error(self, message: str) -> None:
        self.message("error", message)

    def success(self, message: str) -> None:
        self.message("success", message)

    def panel(
        self,
        message: str,
        title: str | None = None,
        border_style: str | None = None,
    ) -> None:
        self._sink.emit_panel(message, title, border_style)

    def rule(self, title: str) -> None:
        self._sink.emit_rule(title)
