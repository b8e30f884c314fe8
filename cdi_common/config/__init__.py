"""Configuration parsing helpers."""

from cdi_common.config.env import ENV_PREFIX, env_value, parse_bool_env

__all__ = ["ENV_PREFIX", "env_value", "parse_bool_env"]
