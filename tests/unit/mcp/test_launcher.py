"""Unit tests for the MCP server launcher."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from google_search_mcp.config import Settings
from google_search_mcp.errors import ConfigurationError
from google_search_mcp.mcp.base_tools import MCPToolRegistry
from google_search_mcp.mcp.launcher import launch_mcp_server


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        google_api_key='launch-key',
        google_search_engine_id='launch-cx',
        server_name='Test Server',
    )


@pytest.fixture
def fake_server():
    server = MagicMock()
    server.tool_registry = MCPToolRegistry()
    server.start = AsyncMock()
    server.wait_closed = AsyncMock()
    server.stop = AsyncMock()
    return server


@pytest.mark.asyncio
async def test_launch_registers_tool_and_serves(settings, fake_server):
    with patch(
        'google_search_mcp.mcp.launcher.create_mcp_server', return_value=fake_server
    ) as create:
        await launch_mcp_server(settings, stdio=False, http=True, http_port=9100)

    create.assert_called_once_with(
        server_name='Test Server',
        server_version='1.0.0',
        enable_stdio=False,
        enable_http=True,
        http_host='localhost',
        http_port=9100,
    )
    assert fake_server.tool_registry.get_tool_names() == ['google_search']
    tool = fake_server.tool_registry.get_tool('google_search')
    assert tool.client.credentials.api_key == 'launch-key'
    assert tool.client.client.is_closed
    fake_server.start.assert_awaited_once()
    fake_server.wait_closed.assert_awaited_once()
    fake_server.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_launch_stops_server_when_serving_fails(settings, fake_server):
    fake_server.wait_closed.side_effect = RuntimeError('transport died')

    with patch(
        'google_search_mcp.mcp.launcher.create_mcp_server', return_value=fake_server
    ):
        with pytest.raises(RuntimeError):
            await launch_mcp_server(settings)

    fake_server.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_launch_without_credentials_never_creates_server():
    with patch('google_search_mcp.mcp.launcher.create_mcp_server') as create:
        with pytest.raises(ConfigurationError):
            await launch_mcp_server(Settings(_env_file=None))

    create.assert_not_called()
