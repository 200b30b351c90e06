"""MCP server for projectrag."""

from projectrag.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
