"""Executes wizard effects and feeds their outcomes back as events."""

from __future__ import annotations

import logging
from typing import Callable

from cdi_app.config import ImporterSettings
from cdi_app.importer import RowCallback, import_devices
from cdi_app.loaders import ResourceKind, list_items
from cdi_app.session import DeviceService, connect
from cdi_app.wizard import (
    ApplicationsLoaded,
    Connect,
    Connected,
    DeviceProfilesLoaded,
    DevicesCreated,
    Effect,
    Event,
    Failed,
    ImportDevices,
    LoadApplications,
    LoadDeviceProfiles,
    LoadTenants,
    OpenFilePicker,
    Quit,
    TenantsLoaded,
    WizardModel,
    WizardState,
    transition,
)
from cdi_common.errors import CDIError

logger = logging.getLogger(__name__)

Connector = Callable[[str, str, float], DeviceService]


def _default_connector(server_address: str, token: str, timeout: float) -> DeviceService:
    return connect(server_address, token, timeout=timeout)


class WizardController:
    """Owns the session and runs the effect loop, one call at a time."""

    def __init__(
        self,
        settings: ImporterSettings | None = None,
        *,
        connector: Connector | None = None,
        on_row: RowCallback | None = None,
    ) -> None:
        self.settings = settings or ImporterSettings()
        self._connector = connector or _default_connector
        self.on_row = on_row
        self.session: DeviceService | None = None
        self.model = WizardModel()

    @property
    def state(self) -> WizardState:
        return self.model.state

    def dispatch(self, event: Event) -> WizardModel:
        """Apply ``event`` and run follow-up effects until none is left.

        Returns once the wizard waits for user input (a selection state,
        the file picker) or reaches a terminal state.
        """
        pending: Event | None = event
        while pending is not None:
            step = transition(self.model, pending)
            if step.model.state != self.model.state:
                logger.debug("Wizard %s -> %s", self.model.state.value, step.model.state.value)
            self.model = step.model
            pending = self._run(step.effect) if step.effect is not None else None
        return self.model

    def _run(self, effect: Effect) -> Event | None:
        if isinstance(effect, Quit):
            self.close()
            return None
        if isinstance(effect, OpenFilePicker):
            return None
        try:
            return self._execute(effect)
        except CDIError as exc:
            logger.error(
                "%s failed: %s",
                type(effect).__name__,
                exc.message,
                extra={"error_type": exc.error_type, "error_context": exc.context},
            )
            return Failed(exc)

    def _execute(self, effect: Effect) -> Event:
        limit = self.settings.page_limit
        if isinstance(effect, Connect):
            self.close()
            self.session = self._connector(
                self.settings.server_address, effect.token, self.settings.connect_timeout
            )
            return Connected()
        session = self._require_session()
        if isinstance(effect, LoadTenants):
            return TenantsLoaded(tuple(list_items(session, ResourceKind.TENANTS, limit=limit)))
        if isinstance(effect, LoadApplications):
            return ApplicationsLoaded(
                tuple(list_items(session, ResourceKind.APPLICATIONS, effect.tenant_id, limit))
            )
        if isinstance(effect, LoadDeviceProfiles):
            return DeviceProfilesLoaded(
                tuple(list_items(session, ResourceKind.DEVICE_PROFILES, effect.tenant_id, limit))
            )
        if isinstance(effect, ImportDevices):
            result = import_devices(
                session,
                effect.application_id,
                effect.device_profile_id,
                effect.file_path,
                on_row=self.on_row,
            )
            return DevicesCreated(result)
        raise TypeError(f"Unsupported effect: {effect!r}")

    def _require_session(self) -> DeviceService:
        if self.session is None:
            raise CDIError("No open session")
        return self.session

    def close(self) -> None:
        """Close the session if one is open; safe to call repeatedly."""
        if self.session is not None:
            self.session.close()
            self.session = None
