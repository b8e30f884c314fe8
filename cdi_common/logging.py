"""structlog-rendered stdlib logging for the importer.

The wizard owns the terminal, so the default level is WARNING: per-row
failures show up, routine progress and the plaintext-channel notice do
not. ``--log-file`` or ``CDI_LOG_FILE`` keeps a full trail next to it.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import structlog

from cdi_common.config.env import env_value, parse_bool_env

DEFAULT_LEVEL = logging.WARNING


@dataclass(frozen=True)
class LogSettings:
    level: int = DEFAULT_LEVEL
    json: bool = False
    log_file: str | None = None


def _level_from(value: str | int | None) -> int:
    if value is None:
        return DEFAULT_LEVEL
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    return logging.getLevelNamesMapping().get(value.strip().upper(), DEFAULT_LEVEL)


def resolve_log_settings(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
) -> LogSettings:
    """Merge explicit arguments over ``CDI_LOG_LEVEL/JSON/FILE``."""
    if json is None:
        json = bool(parse_bool_env(env_value("LOG_JSON")))
    return LogSettings(
        level=logging.DEBUG if debug else _level_from(level or env_value("LOG_LEVEL")),
        json=json,
        log_file=log_file if log_file is not None else env_value("LOG_FILE"),
    )


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def build_formatter(json: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter for stdlib records; ``extra=`` fields are rendered too."""
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[*_pre_chain(), structlog.stdlib.ExtraAdder()],
    )


def _configure_structlog() -> None:
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> LogSettings:
    """Attach stderr (and optional file) handlers to the root logger.

    A root logger that already has handlers is left alone unless ``force``
    is set; structlog is configured either way. Returns the settings used.
    """
    settings = resolve_log_settings(level=level, debug=debug, log_file=log_file, json=json)
    root = logging.getLogger()
    if force or not root.handlers:
        formatter = build_formatter(settings.json)
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if settings.log_file:
            handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
        if force:
            root.handlers.clear()
        for handler in handlers:
            handler.setFormatter(formatter)
            root.addHandler(handler)
        root.setLevel(settings.level)
    _configure_structlog()
    return settings
