from __future__ import annotations


class UIFlowError(RuntimeError):
    """A wizard flow cannot run; the CLI prints the message and exits."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    @classmethod
    def requires_tty(cls) -> "UIFlowError":
        return cls("The import wizard requires an interactive terminal (TTY).")
