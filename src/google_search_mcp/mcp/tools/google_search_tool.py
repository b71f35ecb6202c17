"""
MCP-compliant Google search tool.

Wires the search pipeline (validation, Custom Search request, parsing and
formatting) behind the ``google_search`` tool.
"""

import asyncio
from typing import Any

from google_search_mcp.errors import GoogleSearchMCPError, InvalidArgumentError
from google_search_mcp.search import (
    GoogleSearchClient,
    format_search_results,
    validate_search_arguments,
)

from ..base_tools import MCPTool, MCPToolCallResult


class GoogleSearchMCPTool(MCPTool):
    """MCP tool for searching the web with Google Custom Search."""

    def __init__(self, client: GoogleSearchClient):
        self.client = client

    @property
    def name(self) -> str:
        return 'google_search'

    @property
    def description(self) -> str:
        return 'Search the web using Google Custom Search'

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            'type': 'object',
            'properties': {
                'query': {
                    'type': 'string',
                    'description': 'The search query',
                },
                'num_results': {
                    'type': 'number',
                    'description': 'Number of results to return (max 10, default 5)',
                },
            },
            'required': ['query'],
        }

    async def execute(self, arguments: dict[str, Any]) -> MCPToolCallResult:
        """Validate arguments, run the search and format the results."""
        try:
            request = validate_search_arguments(arguments)
        except InvalidArgumentError as e:
            return self.handle_error(e)

        try:
            # httpx.Client is blocking; keep the transport loop responsive.
            response = await asyncio.to_thread(self.client.search, request)
        except GoogleSearchMCPError as e:
            return self.handle_error(e, prefix='search failed')

        return self.text_result(format_search_results(response))
