"""Generic fetch-and-project loader for the selection screens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence

import grpc

from cdi_app.config import MAX_PAGE_SIZE
from cdi_app.models import SelectionItem
from cdi_app.session import DeviceService
from cdi_common.errors import ConfigurationError, RPCError

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    TENANTS = "tenants"
    APPLICATIONS = "applications"
    DEVICE_PROFILES = "device_profiles"


@dataclass(frozen=True)
class _ListSpec:
    fetch: Callable[[DeviceService, str | None, int], Sequence[Any]]
    describe: Callable[[Any], str]
    tenant_scoped: bool


_SPECS: dict[ResourceKind, _ListSpec] = {
    ResourceKind.TENANTS: _ListSpec(
        fetch=lambda svc, _tenant, limit: svc.list_tenants(limit),
        describe=lambda rec: rec.name,
        tenant_scoped=False,
    ),
    ResourceKind.APPLICATIONS: _ListSpec(
        fetch=lambda svc, tenant, limit: svc.list_applications(tenant or "", limit),
        describe=lambda rec: rec.description,
        tenant_scoped=True,
    ),
    ResourceKind.DEVICE_PROFILES: _ListSpec(
        fetch=lambda svc, tenant, limit: svc.list_device_profiles(tenant or "", limit),
        describe=lambda rec: rec.name,
        tenant_scoped=True,
    ),
}


def _describe_rpc_error(exc: grpc.RpcError) -> str:
    code = getattr(exc, "code", None)
    details = getattr(exc, "details", None)
    if callable(code) and callable(details):
        status = code()
        name = getattr(status, "name", str(status))
        return f"{name}: {details()}"
    return str(exc)


def list_items(
    service: DeviceService,
    kind: ResourceKind,
    tenant_id: str | None = None,
    limit: int = MAX_PAGE_SIZE,
) -> list[SelectionItem]:
    """Fetch one page of ``kind`` and project each record to a SelectionItem.

    Only the first page is requested: anything past ``limit`` (at most 100)
    is not shown. Order is whatever the server returned.
    """
    spec = _SPECS[kind]
    if spec.tenant_scoped and not tenant_id:
        raise ConfigurationError(
            f"Listing {kind.value} requires a tenant id",
            context={"kind": kind.value},
        )
    limit = max(1, min(limit, MAX_PAGE_SIZE))

    try:
        records = spec.fetch(service, tenant_id, limit)
    except grpc.RpcError as exc:
        raise RPCError(
            f"Failed to list {kind.value}: {_describe_rpc_error(exc)}",
            context={"kind": kind.value, "tenant_id": tenant_id},
            cause=exc,
        ) from exc

    items = [
        SelectionItem(title=rec.name, description=spec.describe(rec), id=rec.id)
        for rec in records
    ]
    logger.info("Loaded %d %s", len(items), kind.value)
    if len(items) >= limit:
        logger.warning(
            "Listed %d %s; entries beyond the first page are not shown",
            len(items),
            kind.value,
        )
    return items
