"""Tests for ImporterSettings env/override resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from cdi_app.config import DEFAULT_SERVER_ADDRESS, MAX_PAGE_SIZE, ImporterSettings
from cdi_common.errors import ConfigurationError

pytestmark = pytest.mark.unit_app


def test_defaults_match_local_chirpstack() -> None:
    settings = ImporterSettings.from_env({})

    assert settings.server_address == DEFAULT_SERVER_ADDRESS == "localhost:8081"
    assert settings.page_limit == MAX_PAGE_SIZE == 100
    assert settings.allowed_extensions == [".csv"]
    assert settings.start_directory == Path.home()


def test_env_values_are_read() -> None:
    env = {
        "CDI_SERVER": "chirpstack:8080",
        "CDI_PAGE_LIMIT": "50",
        "CDI_CONNECT_TIMEOUT": "0",
        "CDI_START_DIR": "/srv/imports",
    }

    settings = ImporterSettings.from_env(env)

    assert settings.server_address == "chirpstack:8080"
    assert settings.page_limit == 50
    assert settings.connect_timeout == 0
    assert settings.start_directory == Path("/srv/imports")


def test_overrides_win_and_none_is_ignored() -> None:
    env = {"CDI_SERVER": "from-env:1"}

    settings = ImporterSettings.from_env(env, server_address="cli:2", start_directory=None)

    assert settings.server_address == "cli:2"
    assert settings.start_directory == Path.home()


def test_blank_env_values_count_as_unset() -> None:
    settings = ImporterSettings.from_env({"CDI_SERVER": "   "})

    assert settings.server_address == DEFAULT_SERVER_ADDRESS


@pytest.mark.parametrize(
    "env",
    [
        {"CDI_PAGE_LIMIT": "500"},
        {"CDI_PAGE_LIMIT": "0"},
        {"CDI_CONNECT_TIMEOUT": "-1"},
        {"CDI_PAGE_LIMIT": "many"},
    ],
)
def test_invalid_values_raise_configuration_error(env) -> None:
    with pytest.raises(ConfigurationError):
        ImporterSettings.from_env(env)


def test_extensions_are_normalized() -> None:
    settings = ImporterSettings(allowed_extensions=["CSV", ".Txt", " "])

    assert settings.allowed_extensions == [".csv", ".txt"]
