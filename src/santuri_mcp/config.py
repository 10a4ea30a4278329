"""Configuration models and the process-wide connection settings cache."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

DEFAULT_API_URL = "https://santuri.io"

_HTTP_URL = TypeAdapter(HttpUrl)


class ConnectionConfig(BaseModel):
    """Remote access settings shared by every tool call.

    A missing `api_key` is valid: the remote service serves anonymous,
    rate-limited searches.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    api_url: str = DEFAULT_API_URL
    stack_id: str | None = None
    timeout_seconds: float = Field(default=30.0, gt=0.0)

    @field_validator("api_url")
    @classmethod
    def _validate_api_url(cls, value: str) -> str:
        value = value.rstrip("/") or DEFAULT_API_URL
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            raise ValueError(f"SANTURI_API_URL is not a valid http(s) URL: {value!r}") from exc
        return value

    @property
    def authenticated(self) -> bool:
        return self.api_key is not None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConnectionConfig":
        """Build settings from `SANTURI_*` variables; empty values count as unset."""
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            value = env.get(name)
            return value or None

        values: dict[str, object] = {
            "api_key": _get("SANTURI_API_KEY"),
            "api_url": _get("SANTURI_API_URL") or DEFAULT_API_URL,
            "stack_id": _get("SANTURI_STACK_ID"),
        }
        timeout = _get("SANTURI_TIMEOUT_SECONDS")
        if timeout is not None:
            values["timeout_seconds"] = timeout
        return cls.model_validate(values)


class ServerConfig(BaseModel):
    """Identity and logging settings for the MCP server process."""

    name: str = "santuri"
    version: str = "1.0.0"
    log_level: str = Field(default_factory=lambda: os.getenv("SANTURI_LOG_LEVEL", "INFO"))


_config: ConnectionConfig | None = None


def get_config() -> ConnectionConfig:
    """Return the cached connection settings, reading the environment once."""
    global _config
    if _config is None:
        _config = ConnectionConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached settings so the next `get_config` re-reads the environment."""
    global _config
    _config = None
