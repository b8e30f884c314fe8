"""Typed failures raised by the importer and reported by the wizard."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

_SCALARS = (str, int, float, bool)


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_json_safe(item) for item in value]
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Copy ``context`` with every value reduced to JSON types (paths become str)."""
    return _json_safe(context)


class CDIError(Exception):
    """Base of every failure the wizard can show on its error screen.

    ``str(err)`` is the message followed by ``hint`` on its own line when a
    hint is set; the error screen prints it verbatim. ``context`` carries
    structured fields for the log.
    """

    hint: str | None = None

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
        hint: str | None = None,
    ) -> None:
        if hint is not None:
            self.hint = hint
        self.message = message
        super().__init__(f"{message}\n{self.hint}" if self.hint else message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        payload = {"type": self.error_type, "message": self.message, "context": self.context}
        if self.hint:
            payload["hint"] = self.hint
        return payload


class ServerConnectionError(CDIError):
    """The gRPC channel to the network server never became ready."""

    hint = "Make sure ChirpStack gRPC API is running on this address"


class RPCError(CDIError):
    """A list call was rejected, authentication failures included."""


class FileReadError(CDIError):
    """The CSV input could not be opened, decoded or parsed."""


class RowCreationError(CDIError):
    """One CSV row could not be turned into a device; the batch goes on."""


class ConfigurationError(CDIError):
    """Settings from env or CLI options failed validation."""


class WizardStateError(CDIError):
    """Illegal wizard mutation, e.g. overwriting an already chosen id."""


E = TypeVar("E", bound=CDIError)


def wrap_error(
    error_cls: type[E],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> E:
    """Build ``error_cls`` around ``cause`` without raising it."""
    return error_cls(message, context=context, cause=cause)
