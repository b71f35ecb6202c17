"""
Model Context Protocol (MCP) server implementation

JSON-RPC 2.0 protocol handling, the tool registry and the stdio and HTTP
transports the ``google_search`` tool is served over.
"""

from .base_tools import MCPTool, MCPToolRegistry
from .server import MCPServer, create_mcp_server
from .transports import HTTPTransport, StdioTransport

__all__ = [
    'HTTPTransport',
    'MCPServer',
    'MCPTool',
    'MCPToolRegistry',
    'StdioTransport',
    'create_mcp_server',
]
