"""Runtime settings for the importer."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from cdi_common.config.env import env_value
from cdi_common.errors import ConfigurationError

DEFAULT_SERVER_ADDRESS = "localhost:8081"
# The list RPCs are issued once with this limit; there is no follow-up page.
MAX_PAGE_SIZE = 100


class ImporterSettings(BaseModel):
    """Connection and picker settings, overridable via CDI_* env vars."""

    server_address: str = Field(default=DEFAULT_SERVER_ADDRESS, min_length=1)
    page_limit: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    connect_timeout: float = Field(
        default=5.0,
        ge=0,
        description="Seconds to wait for the channel to become ready; 0 skips the wait",
    )
    start_directory: Path = Field(default_factory=Path.home)
    allowed_extensions: list[str] = Field(default_factory=lambda: [".csv"])
    show_hidden: bool = False

    @field_validator("server_address")
    @classmethod
    def _strip_address(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("server address must not be blank")
        return value

    @field_validator("allowed_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "ImporterSettings":
        """Build settings from CDI_* variables; explicit overrides win.

        ``None`` overrides are ignored so CLI options can be passed through
        untouched.
        """
        data: dict[str, Any] = {}
        env_map = {
            "server_address": "SERVER",
            "page_limit": "PAGE_LIMIT",
            "connect_timeout": "CONNECT_TIMEOUT",
            "start_directory": "START_DIR",
        }
        for field_name, key in env_map.items():
            raw = env_value(key, environ)
            if raw is not None:
                data[field_name] = raw
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            settings = cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid importer settings: {exc}",
                context={"fields": sorted(data)},
                cause=exc,
            ) from exc
        return settings.model_copy(
            update={"start_directory": settings.start_directory.expanduser()}
        )
