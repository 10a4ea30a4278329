"""Exception types raised by the gateway and the tool dispatcher."""

from __future__ import annotations

from pydantic import ValidationError


class SanturiError(Exception):
    """Base class for failures rendered back to the caller as error results."""


class RemoteCallError(SanturiError):
    """The Santuri API call failed, returned a non-2xx status, or sent an unexpected body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnknownToolError(SanturiError, LookupError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


def describe_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic validation error into one readable line."""
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "invalid arguments"
