"""
MCP Server Implementation

This module provides the MCP server that routes protocol messages to the
tool registry and coordinates the transport layers.
"""

import sys
from typing import Any

from loguru import logger

from .base_tools import MCPTool
from .protocol import (
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    MCPCapabilities,
    MCPErrorCodes,
    MCPProtocolHandler,
    MCPServerInfo,
)
from .tools import MCPToolRegistry
from .transports import HTTPTransport, StdioTransport, TransportManager

# MCP logging levels mapped onto loguru levels
LOG_LEVELS = {
    'debug': 'DEBUG',
    'info': 'INFO',
    'notice': 'INFO',
    'warning': 'WARNING',
    'error': 'ERROR',
    'critical': 'CRITICAL',
    'alert': 'CRITICAL',
    'emergency': 'CRITICAL',
}


class MCPServer:
    """
    Main MCP server implementation.

    Handles the initialize handshake, ping, tool listing, tool calls and
    runtime log level changes over any configured transport.
    """

    def __init__(
        self,
        server_name: str = 'Google Search MCP Server',
        server_version: str = '1.0.0',
    ):
        """
        Initialize the MCP server.

        Args:
            server_name: Name of the MCP server
            server_version: Version of the MCP server
        """
        self.server_info = MCPServerInfo(name=server_name, version=server_version)
        self.protocol_handler = MCPProtocolHandler()
        self.tool_registry = MCPToolRegistry()
        self.transport_manager = TransportManager(self.protocol_handler)
        self.transport_manager.set_message_handler(self._handle_message)

        self.capabilities = MCPCapabilities(
            tools={'listChanged': False},
            logging={},
        )

        logger.info(f'Initialized MCP Server: {server_name} v{server_version}')

    def add_stdio_transport(self) -> None:
        """Add stdio transport for subprocess clients."""
        transport = StdioTransport(self.protocol_handler)
        self.transport_manager.add_transport('stdio', transport)

    def add_http_transport(self, host: str = 'localhost', port: int = 8000) -> None:
        """Add HTTP transport for network clients."""
        transport = HTTPTransport(
            self.protocol_handler,
            host,
            port,
            title=self.server_info.name,
            version=self.server_info.version,
        )
        self.transport_manager.add_transport('http', transport)

    async def start(self) -> None:
        """Start the MCP server with all configured transports."""
        logger.info('Starting MCP server...')
        await self.transport_manager.start_all()
        logger.info('MCP server started successfully')

    async def wait_closed(self) -> None:
        """Block until a transport stops serving."""
        await self.transport_manager.wait_closed()

    async def stop(self) -> None:
        """Stop the MCP server."""
        logger.info('Stopping MCP server...')
        await self.transport_manager.stop_all()
        logger.info('MCP server stopped')

    async def _handle_message(
        self, message: JSONRPCRequest | JSONRPCNotification
    ) -> JSONRPCResponse | None:
        """
        Handle incoming MCP messages.

        Dispatches requests to handlers by method name. Notifications never
        produce a response.
        """
        method = message.method
        params = message.params or {}
        logger.debug(f'Handling MCP method: {method}')

        if isinstance(message, JSONRPCNotification):
            if method in ('notifications/initialized', 'initialized'):
                self.protocol_handler.handle_initialized()
            else:
                logger.debug(f'Ignoring notification: {method}')
            return None

        try:
            if method == 'initialize':
                return self._handle_initialize(message.id, params)
            elif method == 'ping':
                return self.protocol_handler.create_response(message.id, {})
            elif method == 'tools/list':
                return self._handle_tools_list(message.id)
            elif method == 'tools/call':
                return await self._handle_tools_call(message.id, params)
            elif method == 'logging/setLevel':
                return self._handle_logging_set_level(message.id, params)
            else:
                return self.protocol_handler.create_error_response(
                    message.id,
                    MCPErrorCodes.METHOD_NOT_FOUND,
                    f'Method not found: {method}',
                )
        except ValueError as e:
            return self.protocol_handler.create_error_response(
                message.id, MCPErrorCodes.INVALID_PARAMS, str(e)
            )
        except Exception as e:
            logger.exception(f'Error handling {method}')
            return self.protocol_handler.create_error_response(
                message.id, MCPErrorCodes.INTERNAL_ERROR, f'Internal error: {e}'
            )

    def _handle_initialize(
        self, request_id: Any, params: dict[str, Any]
    ) -> JSONRPCResponse:
        """Handle MCP initialize request."""
        init_params = self.protocol_handler.validate_initialize_request(params)
        result = self.protocol_handler.handle_initialize(
            init_params, self.server_info, self.capabilities
        )
        return self.protocol_handler.create_response(
            request_id, result.model_dump(exclude_none=True)
        )

    def _handle_tools_list(self, request_id: Any) -> JSONRPCResponse:
        """Handle tools/list request."""
        tools = self.tool_registry.get_tool_schemas()
        result = {'tools': [tool.model_dump() for tool in tools]}
        return self.protocol_handler.create_response(request_id, result)

    async def _handle_tools_call(
        self, request_id: Any, params: dict[str, Any]
    ) -> JSONRPCResponse:
        """Handle tools/call request."""
        tool_params = self.protocol_handler.validate_tool_call_params(params)
        result = await self.tool_registry.execute_tool(
            tool_params.name, tool_params.arguments or {}
        )
        return self.protocol_handler.create_response(request_id, result.model_dump())

    def _handle_logging_set_level(
        self, request_id: Any, params: dict[str, Any]
    ) -> JSONRPCResponse:
        """Handle logging/setLevel request."""
        level = str(params.get('level', 'info')).lower()
        if level not in LOG_LEVELS:
            raise ValueError(f'Unknown log level: {level}')

        logger.remove()
        logger.add(sys.stderr, level=LOG_LEVELS[level])
        logger.info(f'Log level set to: {LOG_LEVELS[level]}')
        return self.protocol_handler.create_response(request_id, {})

    def register_tool_instance(self, tool: MCPTool) -> None:
        """Register a tool instance with the server."""
        self.tool_registry.register_instance(tool)


def create_mcp_server(
    server_name: str = 'Google Search MCP Server',
    server_version: str = '1.0.0',
    enable_stdio: bool = True,
    enable_http: bool = False,
    http_host: str = 'localhost',
    http_port: int = 8000,
) -> MCPServer:
    """
    Create and configure an MCP server with transports.

    Args:
        server_name: Name reported to clients
        server_version: Version reported to clients
        enable_stdio: Enable stdio transport
        enable_http: Enable HTTP transport
        http_host: HTTP server host
        http_port: HTTP server port

    Returns:
        Configured MCPServer instance
    """
    server = MCPServer(server_name, server_version)

    if enable_stdio:
        server.add_stdio_transport()

    if enable_http:
        server.add_http_transport(http_host, http_port)

    return server
