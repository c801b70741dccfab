"""MCP tool surface for saved projects."""

from .server import ServiceContext, create_server

__all__ = ["ServiceContext", "create_server"]
