"""Tests for the shared error taxonomy."""

from __future__ import annotations

from pathlib import Path

import pytest

from cdi_common.errors import (
    CDIError,
    FileReadError,
    RowCreationError,
    RPCError,
    ServerConnectionError,
    wrap_error,
)

pytestmark = pytest.mark.unit_common


def test_to_dict_normalizes_context() -> None:
    err = FileReadError(
        "cannot open",
        context={
            "file_path": Path("/tmp/devices.csv"),
            "row": 3,
            "nested": {"path": Path("nested")},
            "items": (Path("a"), "b"),
        },
    )

    payload = err.to_dict()

    assert payload["type"] == "FileReadError"
    assert payload["message"] == "cannot open"
    assert payload["context"]["file_path"].endswith("devices.csv")
    assert payload["context"]["row"] == 3
    assert payload["context"]["nested"]["path"] == "nested"
    assert payload["context"]["items"] == ["a", "b"]


@pytest.mark.parametrize(
    "error_cls", [ServerConnectionError, RPCError, FileReadError, RowCreationError]
)
def test_subclasses_share_the_base(error_cls) -> None:
    err = error_cls("boom")

    assert isinstance(err, CDIError)
    assert err.error_type == error_cls.__name__
    assert err.context == {}


def test_wrap_error_keeps_cause() -> None:
    cause = OSError("disk gone")

    err = wrap_error(FileReadError, "read failed", context={"file_path": "x.csv"}, cause=cause)

    assert isinstance(err, FileReadError)
    assert err.__cause__ is cause
    assert err.context == {"file_path": "x.csv"}


def test_connection_error_carries_hint() -> None:
    err = ServerConnectionError("failed to connect to ChirpStack at cs:8081")

    assert str(err) == (
        "failed to connect to ChirpStack at cs:8081\n"
        "Make sure ChirpStack gRPC API is running on this address"
    )
    assert err.message == "failed to connect to ChirpStack at cs:8081"
    assert err.to_dict()["hint"].startswith("Make sure")
    assert "hint" not in RPCError("denied").to_dict()
