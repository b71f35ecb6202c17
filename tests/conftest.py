"""Pytest configuration and shared fixtures."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from google_search_mcp.config import Credentials
from google_search_mcp.mcp.server import MCPServer
from google_search_mcp.mcp.tools import GoogleSearchMCPTool
from google_search_mcp.search import (
    GoogleSearchClient,
    SearchResponse,
    SearchResultItem,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from a developer's real credentials and .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ('GOOGLE_API_KEY', 'GOOGLE_SEARCH_ENGINE_ID', 'LOG_LEVEL', 'LOG_FILE'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials() -> Credentials:
    """Test credentials."""
    return Credentials(api_key='test-key', search_engine_id='test-cx')


@pytest.fixture
def search_client(credentials):
    """Real client; HTTP is expected to be mocked with respx."""
    client = GoogleSearchClient(credentials)
    yield client
    client.close()


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """A Custom Search response body with two results."""
    return {
        'kind': 'customsearch#search',
        'searchInformation': {'totalResults': '2'},
        'items': [
            {
                'kind': 'customsearch#result',
                'title': 'Python.org',
                'link': 'https://www.python.org/',
                'displayLink': 'www.python.org',
                'snippet': 'The official home of the Python Programming Language.',
            },
            {
                'kind': 'customsearch#result',
                'title': 'Python (programming language) - Wikipedia',
                'link': 'https://en.wikipedia.org/wiki/Python_(programming_language)',
                'displayLink': 'en.wikipedia.org',
                'snippet': 'Python is a high-level, general-purpose programming language.',
            },
        ],
    }


@pytest.fixture
def sample_response() -> SearchResponse:
    """Parsed response with two results."""
    return SearchResponse(
        items=(
            SearchResultItem(title='X', link='http://x', snippet='first'),
            SearchResultItem(title='Y', link='http://y', snippet='second'),
        )
    )


@pytest.fixture
def mock_search_client(sample_response):
    """Search client double returning ``sample_response``."""
    client = MagicMock(spec=GoogleSearchClient)
    client.search.return_value = sample_response
    return client


@pytest.fixture
def mcp_server(mock_search_client) -> MCPServer:
    """MCP server with the google_search tool backed by a mock client."""
    server = MCPServer()
    server.register_tool_instance(GoogleSearchMCPTool(mock_search_client))
    return server
