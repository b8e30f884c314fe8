"""Shared helpers for chirpstack-device-importer."""

from cdi_common.api import CDIError, configure_logging

__all__ = ["CDIError", "configure_logging"]
