from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Callable

import grpc
import pytest
from rich.console import Console
from rich.table import Table

from cdi_app.models import ImportRecord


class FakeRpcError(grpc.RpcError):
    """Stand-in for a status error raised by a gRPC stub."""

    def __init__(self, code: grpc.StatusCode, details: str) -> None:
        super().__init__(details)
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details

    def __str__(self) -> str:
        return f"{self._code.name}: {self._details}"


def record(id: str, name: str, description: str = "") -> SimpleNamespace:
    """A list-response entry shaped like the ChirpStack *ListItem messages."""
    return SimpleNamespace(id=id, name=name, description=description)


@dataclass
class FakeDeviceService:
    """In-memory DeviceService; records every call in order."""

    tenants: list[Any] = field(default_factory=list)
    applications: dict[str, list[Any]] = field(default_factory=dict)
    profiles: dict[str, list[Any]] = field(default_factory=dict)
    fail_dev_euis: set[str] = field(default_factory=set)
    list_error: Exception | None = None
    calls: list[tuple] = field(default_factory=list)
    created: list[tuple[ImportRecord, str, str]] = field(default_factory=list)
    close_count: int = 0

    def _check(self) -> None:
        if self.list_error is not None:
            raise self.list_error

    def list_tenants(self, limit: int) -> list[Any]:
        self.calls.append(("list_tenants", limit))
        self._check()
        return self.tenants[:limit]

    def list_applications(self, tenant_id: str, limit: int) -> list[Any]:
        self.calls.append(("list_applications", tenant_id, limit))
        self._check()
        return self.applications.get(tenant_id, [])[:limit]

    def list_device_profiles(self, tenant_id: str, limit: int) -> list[Any]:
        self.calls.append(("list_device_profiles", tenant_id, limit))
        self._check()
        return self.profiles.get(tenant_id, [])[:limit]

    def create_device(
        self, record: ImportRecord, application_id: str, device_profile_id: str
    ) -> None:
        self.calls.append(("create_device", record.dev_eui))
        if record.dev_eui in self.fail_dev_euis:
            raise FakeRpcError(grpc.StatusCode.ALREADY_EXISTS, "object already exists")
        self.created.append((record, application_id, device_profile_id))

    def close(self) -> None:
        self.close_count += 1


@pytest.fixture
def rpc_error() -> type[FakeRpcError]:
    return FakeRpcError


@pytest.fixture
def make_record() -> Callable[..., SimpleNamespace]:
    return record


@pytest.fixture
def fake_service() -> FakeDeviceService:
    return FakeDeviceService(
        tenants=[record("t-1", "Acme"), record("t-2", "Globex")],
        applications={
            "t-1": [record("app-1", "Sensors", "Building sensors")],
            "t-2": [record("app-9", "Meters", "Water meters")],
        },
        profiles={
            "t-1": [record("dp-1", "Class A EU868"), record("dp-2", "Class C EU868")],
        },
    )


@pytest.fixture
def write_csv(tmp_path) -> Callable[[str], str]:
    def _write(content: str, name: str = "devices.csv") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print pass/fail counts per marker at the end of the session."""
    _ = (exitstatus, config)
    known_markers = {"unit_common", "unit_app", "unit_ui"}
    marker_stats = defaultdict(lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0})

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                for marker in known_markers:
                    if marker in report.keywords:
                        marker_stats[marker][outcome] += 1
                        marker_stats[marker]["total"] += 1

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
        )

    console = Console()
    console.print("\n")
    console.print(table)
