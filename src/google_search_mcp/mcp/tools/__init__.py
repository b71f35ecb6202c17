"""
MCP Tools Package

Tools exposed by the Google Search MCP server.
"""

from google_search_mcp.search import GoogleSearchClient

from ..base_tools import MCPTool, MCPToolCallResult, MCPToolRegistry
from .google_search_tool import GoogleSearchMCPTool


def register_all_mcp_tools(
    registry: MCPToolRegistry, client: GoogleSearchClient
) -> None:
    """Register every tool of this server with a registry."""
    registry.register_instance(GoogleSearchMCPTool(client))


__all__ = [
    'GoogleSearchMCPTool',
    'MCPTool',
    'MCPToolCallResult',
    'MCPToolRegistry',
    'register_all_mcp_tools',
]
