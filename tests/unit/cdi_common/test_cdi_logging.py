"""Tests for structlog-backed logging configuration."""

from __future__ import annotations

import json
import logging

import pytest

from cdi_common.logging import DEFAULT_LEVEL, configure_logging, resolve_log_settings

pytestmark = pytest.mark.unit_common


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_output_to_log_file(clean_root_logger, tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("CDI_LOG_LEVEL", raising=False)
    log_file = tmp_path / "cdi.log"

    configure_logging(level="INFO", json=True, log_file=str(log_file), force=True)
    logging.getLogger("cdi_app.importer").info("Created device %s", "04ABEF01")

    payload = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert payload["event"] == "Created device 04ABEF01"
    assert payload["level"] == "info"
    assert "timestamp" in payload


def test_default_level_is_warning(clean_root_logger, monkeypatch) -> None:
    monkeypatch.delenv("CDI_LOG_LEVEL", raising=False)

    configure_logging(force=True)

    assert clean_root_logger.level == DEFAULT_LEVEL == logging.WARNING


def test_env_level_and_debug_override(clean_root_logger, monkeypatch) -> None:
    monkeypatch.setenv("CDI_LOG_LEVEL", "error")

    configure_logging(force=True)
    assert clean_root_logger.level == logging.ERROR

    configure_logging(level="info", debug=True, force=True)
    assert clean_root_logger.level == logging.DEBUG


def test_existing_handlers_are_kept_without_force(clean_root_logger) -> None:
    sentinel = logging.NullHandler()
    clean_root_logger.addHandler(sentinel)
    before = list(clean_root_logger.handlers)

    configure_logging(level="DEBUG")

    assert clean_root_logger.handlers == before


def test_extra_fields_are_rendered(clean_root_logger, tmp_path) -> None:
    log_file = tmp_path / "cdi.log"

    configure_logging(level="WARNING", json=True, log_file=str(log_file), force=True)
    logging.getLogger("cdi_app.importer").warning(
        "Failed to create device %s", "04ABEF01", extra={"error_context": {"row": 3}}
    )

    payload = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert payload["error_context"] == {"row": 3}


def test_settings_prefer_arguments_over_env(monkeypatch) -> None:
    monkeypatch.setenv("CDI_LOG_LEVEL", "error")
    monkeypatch.setenv("CDI_LOG_JSON", "1")
    monkeypatch.setenv("CDI_LOG_FILE", "/tmp/env.log")

    from_env = resolve_log_settings()
    explicit = resolve_log_settings(level="info", json=False, log_file="run.log")

    assert (from_env.level, from_env.json, from_env.log_file) == (logging.ERROR, True, "/tmp/env.log")
    assert (explicit.level, explicit.json, explicit.log_file) == (logging.INFO, False, "run.log")
