"""Public API surface for cdi_common."""

from cdi_common.errors import (
    CDIError,
    ConfigurationError,
    FileReadError,
    RowCreationError,
    RPCError,
    ServerConnectionError,
    WizardStateError,
    wrap_error,
)
from cdi_common.logging import configure_logging

__all__ = [
    "CDIError",
    "ConfigurationError",
    "FileReadError",
    "RowCreationError",
    "RPCError",
    "ServerConnectionError",
    "WizardStateError",
    "configure_logging",
    "wrap_error",
]
