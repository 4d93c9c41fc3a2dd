"""MCP server exposing the corpus query API."""

from learnindex.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
