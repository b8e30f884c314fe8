"""Public API surface for cdi_app."""

from cdi_app.config import DEFAULT_SERVER_ADDRESS, MAX_PAGE_SIZE, ImporterSettings
from cdi_app.controller import WizardController
from cdi_app.importer import data_start_index, import_devices, is_hex_string, read_rows
from cdi_app.loaders import ResourceKind, list_items
from cdi_app.models import ImportRecord, ImportResult, RowFailure, SelectionItem
from cdi_app.session import DeviceService, Session, bearer_metadata, connect
from cdi_app.wizard import (
    CredentialSubmitted,
    FileChosen,
    ItemChosen,
    QuitRequested,
    WizardContext,
    WizardModel,
    WizardState,
    transition,
)

__all__ = [
    "DEFAULT_SERVER_ADDRESS",
    "MAX_PAGE_SIZE",
    "CredentialSubmitted",
    "DeviceService",
    "FileChosen",
    "ImportRecord",
    "ImportResult",
    "ImporterSettings",
    "ItemChosen",
    "QuitRequested",
    "ResourceKind",
    "RowFailure",
    "SelectionItem",
    "Session",
    "WizardContext",
    "WizardController",
    "WizardModel",
    "WizardState",
    "bearer_metadata",
    "connect",
    "data_start_index",
    "import_devices",
    "is_hex_string",
    "list_items",
    "read_rows",
    "transition",
]
