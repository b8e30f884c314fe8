"""Wizard state machine: explicit states, write-once context, pure transitions.

``transition(model, event)`` never touches the network, the filesystem or
the terminal. It returns the next model plus an optional effect that the
controller executes; the effect's outcome comes back as another event.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Union

from cdi_app.models import ImportResult, SelectionItem
from cdi_common.errors import WizardStateError


class WizardState(str, Enum):
    CONNECTING = "connecting"
    TENANT_SELECT = "tenant_select"
    APPLICATION_SELECT = "application_select"
    DEVICE_PROFILE_SELECT = "device_profile_select"
    FILE_SELECT = "file_select"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (WizardState.COMPLETE, WizardState.ERROR)


SELECTION_STATES = (
    WizardState.TENANT_SELECT,
    WizardState.APPLICATION_SELECT,
    WizardState.DEVICE_PROFILE_SELECT,
)


@dataclass(frozen=True)
class WizardContext:
    """Selections accumulated along the wizard; each field is set once."""

    tenant_id: str = ""
    application_id: str = ""
    device_profile_id: str = ""
    file_path: str = ""

    def with_value(self, name: str, value: str) -> "WizardContext":
        if getattr(self, name):
            raise WizardStateError(
                f"{name} is already set", context={"field": name}
            )
        return replace(self, **{name: value})

    @property
    def is_complete(self) -> bool:
        return all(
            (self.tenant_id, self.application_id, self.device_profile_id, self.file_path)
        )


# Events


@dataclass(frozen=True)
class CredentialSubmitted:
    token: str


@dataclass(frozen=True)
class Connected:
    pass


@dataclass(frozen=True)
class TenantsLoaded:
    items: tuple[SelectionItem, ...]


@dataclass(frozen=True)
class ApplicationsLoaded:
    items: tuple[SelectionItem, ...]


@dataclass(frozen=True)
class DeviceProfilesLoaded:
    items: tuple[SelectionItem, ...]


@dataclass(frozen=True)
class ItemChosen:
    item: SelectionItem | None


@dataclass(frozen=True)
class FileChosen:
    path: str | None


@dataclass(frozen=True)
class DevicesCreated:
    result: ImportResult


@dataclass(frozen=True)
class Failed:
    error: Exception


@dataclass(frozen=True)
class QuitRequested:
    pass


Event = Union[
    CredentialSubmitted,
    Connected,
    TenantsLoaded,
    ApplicationsLoaded,
    DeviceProfilesLoaded,
    ItemChosen,
    FileChosen,
    DevicesCreated,
    Failed,
    QuitRequested,
]


# Effects


@dataclass(frozen=True)
class Connect:
    token: str


@dataclass(frozen=True)
class LoadTenants:
    pass


@dataclass(frozen=True)
class LoadApplications:
    tenant_id: str


@dataclass(frozen=True)
class LoadDeviceProfiles:
    tenant_id: str


@dataclass(frozen=True)
class OpenFilePicker:
    pass


@dataclass(frozen=True)
class ImportDevices:
    application_id: str
    device_profile_id: str
    file_path: str


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[
    Connect,
    LoadTenants,
    LoadApplications,
    LoadDeviceProfiles,
    OpenFilePicker,
    ImportDevices,
    Quit,
]


@dataclass(frozen=True)
class WizardModel:
    state: WizardState = WizardState.CONNECTING
    context: WizardContext = field(default_factory=WizardContext)
    items: tuple[SelectionItem, ...] = ()
    result: ImportResult | None = None
    error: Exception | None = None
    quit_requested: bool = False

    @property
    def created(self) -> int:
        return self.result.created if self.result is not None else 0


@dataclass(frozen=True)
class Transition:
    model: WizardModel
    effect: Effect | None = None


def _stay(model: WizardModel) -> Transition:
    return Transition(model)


def _chosen_id(event: ItemChosen) -> str:
    if event.item is None:
        return ""
    return event.item.id.strip()


def _on_connecting(model: WizardModel, event: Event) -> Transition:
    if isinstance(event, CredentialSubmitted):
        if not event.token:
            return _stay(model)
        return Transition(model, Connect(event.token))
    if isinstance(event, Connected):
        return Transition(model, LoadTenants())
    if isinstance(event, TenantsLoaded):
        return _stay(
            replace(model, state=WizardState.TENANT_SELECT, items=tuple(event.items))
        )
    return _stay(model)


def _on_tenant_select(model: WizardModel, event: Event) -> Transition:
    if isinstance(event, ItemChosen):
        # A load is already pending once the tenant is recorded.
        if model.context.tenant_id:
            return _stay(model)
        tenant_id = _chosen_id(event)
        if not tenant_id:
            return _stay(model)
        context = model.context.with_value("tenant_id", tenant_id)
        return Transition(replace(model, context=context), LoadApplications(tenant_id))
    if isinstance(event, ApplicationsLoaded):
        return _stay(
            replace(model, state=WizardState.APPLICATION_SELECT, items=tuple(event.items))
        )
    return _stay(model)


def _on_application_select(model: WizardModel, event: Event) -> Transition:
    if isinstance(event, ItemChosen):
        if model.context.application_id:
            return _stay(model)
        application_id = _chosen_id(event)
        if not application_id:
            return _stay(model)
        context = model.context.with_value("application_id", application_id)
        return Transition(
            replace(model, context=context), LoadDeviceProfiles(context.tenant_id)
        )
    if isinstance(event, DeviceProfilesLoaded):
        return _stay(
            replace(
                model,
                state=WizardState.DEVICE_PROFILE_SELECT,
                items=tuple(event.items),
            )
        )
    return _stay(model)


def _on_device_profile_select(model: WizardModel, event: Event) -> Transition:
    if isinstance(event, ItemChosen):
        profile_id = _chosen_id(event)
        if not profile_id:
            return _stay(model)
        context = model.context.with_value("device_profile_id", profile_id)
        return Transition(
            replace(model, state=WizardState.FILE_SELECT, context=context, items=()),
            OpenFilePicker(),
        )
    return _stay(model)


def _on_file_select(model: WizardModel, event: Event) -> Transition:
    if isinstance(event, FileChosen):
        path = (event.path or "").strip()
        if not path:
            return _stay(model)
        context = model.context.with_value("file_path", path)
        if not context.is_complete:
            raise WizardStateError(
                "Import requested before all selections were made",
                context=asdict(context),
            )
        return Transition(
            replace(model, state=WizardState.PROCESSING, context=context),
            ImportDevices(
                application_id=context.application_id,
                device_profile_id=context.device_profile_id,
                file_path=context.file_path,
            ),
        )
    return _stay(model)


def _on_processing(model: WizardModel, event: Event) -> Transition:
    if isinstance(event, DevicesCreated):
        return _stay(replace(model, state=WizardState.COMPLETE, result=event.result))
    return _stay(model)


_HANDLERS = {
    WizardState.CONNECTING: _on_connecting,
    WizardState.TENANT_SELECT: _on_tenant_select,
    WizardState.APPLICATION_SELECT: _on_application_select,
    WizardState.DEVICE_PROFILE_SELECT: _on_device_profile_select,
    WizardState.FILE_SELECT: _on_file_select,
    WizardState.PROCESSING: _on_processing,
}


def transition(model: WizardModel, event: Event) -> Transition:
    """Apply ``event`` to ``model``; unknown or invalid events are no-ops."""
    if isinstance(event, QuitRequested):
        return Transition(replace(model, quit_requested=True), Quit())
    if model.state.is_terminal:
        return _stay(model)
    if isinstance(event, Failed):
        return _stay(replace(model, state=WizardState.ERROR, error=event.error))
    handler = _HANDLERS[model.state]
    return handler(model, event)
