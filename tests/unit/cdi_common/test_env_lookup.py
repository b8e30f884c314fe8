"""Tests for CDI_* environment helpers."""

from __future__ import annotations

import pytest

from cdi_common.config import env_value, parse_bool_env

pytestmark = pytest.mark.unit_common


def test_env_value_uses_prefix_and_strips() -> None:
    environ = {"CDI_SERVER": "  cs:8081 ", "SERVER": "ignored"}

    assert env_value("server", environ) == "cs:8081"
    assert env_value("missing", environ) is None


def test_blank_env_value_is_unset() -> None:
    assert env_value("SERVER", {"CDI_SERVER": "   "}) is None


def test_env_value_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("CDI_LOG_LEVEL", "debug")

    assert env_value("LOG_LEVEL") == "debug"


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("TRUE", True), ("on", True), ("yes", True), ("0", False), ("off", False), (None, None)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected
