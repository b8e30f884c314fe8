"""Environment variable lookup for CDI_* settings."""

from __future__ import annotations

import os
from typing import Mapping

ENV_PREFIX = "CDI_"


def env_value(key: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the raw value of ``CDI_<KEY>``; blank strings count as unset."""
    source = os.environ if environ is None else environ
    raw = source.get(f"{ENV_PREFIX}{key.upper()}")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def parse_bool_env(value: str | None) -> bool | None:
    """Return True for "1", "true", "yes", "on" (case-insensitive), None if unset."""
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}

