"""Authenticated gRPC session against the ChirpStack API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

import grpc
from chirpstack_api import api

from cdi_app.models import ImportRecord
from cdi_common.errors import ServerConnectionError

logger = logging.getLogger(__name__)


class DeviceService(Protocol):
    """The subset of the remote API the wizard depends on."""

    def list_tenants(self, limit: int) -> Sequence[Any]: ...

    def list_applications(self, tenant_id: str, limit: int) -> Sequence[Any]: ...

    def list_device_profiles(self, tenant_id: str, limit: int) -> Sequence[Any]: ...

    def create_device(
        self,
        record: ImportRecord,
        application_id: str,
        device_profile_id: str,
    ) -> None: ...

    def close(self) -> None: ...


def bearer_metadata(credential: str) -> list[tuple[str, str]]:
    """Per-call metadata carrying the API token."""
    return [("authorization", f"Bearer {credential}")]


@dataclass
class Session(DeviceService):
    """A single channel plus credential; every call carries the token.

    There is no refresh and no reconnect: a dropped channel surfaces as a
    ``grpc.RpcError`` on the next call.
    """

    server_address: str
    credential: str
    channel: grpc.Channel
    _closed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self._tenants = api.TenantServiceStub(self.channel)
        self._applications = api.ApplicationServiceStub(self.channel)
        self._profiles = api.DeviceProfileServiceStub(self.channel)
        self._devices = api.DeviceServiceStub(self.channel)

    @property
    def metadata(self) -> list[tuple[str, str]]:
        return bearer_metadata(self.credential)

    @property
    def closed(self) -> bool:
        return self._closed

    def list_tenants(self, limit: int) -> Sequence[Any]:
        resp = self._tenants.List(
            api.ListTenantsRequest(limit=limit), metadata=self.metadata
        )
        return list(resp.result)

    def list_applications(self, tenant_id: str, limit: int) -> Sequence[Any]:
        resp = self._applications.List(
            api.ListApplicationsRequest(tenant_id=tenant_id, limit=limit),
            metadata=self.metadata,
        )
        return list(resp.result)

    def list_device_profiles(self, tenant_id: str, limit: int) -> Sequence[Any]:
        resp = self._profiles.List(
            api.ListDeviceProfilesRequest(tenant_id=tenant_id, limit=limit),
            metadata=self.metadata,
        )
        return list(resp.result)

    def create_device(
        self,
        record: ImportRecord,
        application_id: str,
        device_profile_id: str,
    ) -> None:
        device = api.Device(
            dev_eui=record.dev_eui,
            name=record.name,
            description=record.description,
            application_id=application_id,
            device_profile_id=device_profile_id,
            is_disabled=False,
        )
        self._devices.Create(
            api.CreateDeviceRequest(device=device), metadata=self.metadata
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.channel.close()
        logger.debug("Closed channel to %s", self.server_address)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def connect(
    server_address: str,
    credential: str,
    *,
    timeout: float = 0.0,
) -> Session:
    """Open a plaintext channel to ``server_address`` and wrap it in a Session.

    The channel carries no transport encryption; ChirpStack's gRPC API is
    expected on a local or otherwise trusted network. With ``timeout > 0`` the
    call blocks until the channel is ready or raises ServerConnectionError.
    """
    channel = grpc.insecure_channel(server_address)
    logger.info(
        "Opened plaintext gRPC channel to %s (no transport encryption)",
        server_address,
    )

    if timeout > 0:
        try:
            grpc.channel_ready_future(channel).result(timeout=timeout)
        except grpc.FutureTimeoutError as exc:
            channel.close()
            raise ServerConnectionError(
                f"failed to connect to ChirpStack at {server_address}: "
                f"channel not ready after {timeout:g}s",
                context={"server_address": server_address, "timeout": timeout},
                cause=exc,
            ) from exc

    return Session(server_address=server_address, credential=credential, channel=channel)
