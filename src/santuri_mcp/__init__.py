"""Santuri documentation tools for MCP clients."""

from .config import ConnectionConfig, get_config, reset_config

__all__ = ["ConnectionConfig", "get_config", "reset_config"]
