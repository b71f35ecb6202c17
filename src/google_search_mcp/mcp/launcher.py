"""
MCP Server Launcher

Builds the search client and MCP server from settings and runs it with the
requested transport.
"""

import asyncio

from loguru import logger

from google_search_mcp.config import Settings
from google_search_mcp.search import GoogleSearchClient

from .server import create_mcp_server
from .tools import register_all_mcp_tools


async def launch_mcp_server(
    settings: Settings,
    stdio: bool = True,
    http: bool = False,
    http_host: str = 'localhost',
    http_port: int = 8000,
) -> None:
    """
    Launch the MCP server and serve until the transport closes.

    Args:
        settings: Loaded settings
        stdio: Enable stdio transport
        http: Enable HTTP transport
        http_host: HTTP server host
        http_port: HTTP server port

    Raises:
        ConfigurationError: If credentials are missing
    """
    credentials = settings.get_credentials()

    with GoogleSearchClient(credentials, timeout=settings.request_timeout) as client:
        server = create_mcp_server(
            server_name=settings.server_name,
            server_version=settings.server_version,
            enable_stdio=stdio,
            enable_http=http,
            http_host=http_host,
            http_port=http_port,
        )
        register_all_mcp_tools(server.tool_registry, client)
        logger.info(f'Available tools: {server.tool_registry.get_tool_names()}')

        if stdio:
            logger.info('Stdio transport enabled')
        if http:
            logger.info(f'HTTP transport enabled at http://{http_host}:{http_port}/mcp')

        await server.start()
        try:
            await server.wait_closed()
        finally:
            await server.stop()


def run_stdio_server(settings: Settings) -> None:
    """Run MCP server with stdio transport only."""
    try:
        asyncio.run(launch_mcp_server(settings, stdio=True, http=False))
    except KeyboardInterrupt:
        logger.info('MCP stdio server stopped')


def run_http_server(
    settings: Settings, host: str = 'localhost', port: int = 8000
) -> None:
    """Run MCP server with HTTP transport only."""
    try:
        asyncio.run(
            launch_mcp_server(
                settings, stdio=False, http=True, http_host=host, http_port=port
            )
        )
    except KeyboardInterrupt:
        logger.info('MCP HTTP server stopped')
