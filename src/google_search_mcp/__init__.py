"""
Google Search MCP server.

Exposes a single ``google_search`` tool over the Model Context Protocol,
backed by the Google Custom Search JSON API.
"""

__version__ = '1.0.0'

from google_search_mcp.config import Credentials, Settings, load_settings
from google_search_mcp.errors import (
    ConfigurationError,
    GoogleSearchMCPError,
    InvalidArgumentError,
    ParseError,
    TransportError,
    UpstreamError,
)

__all__ = [
    'ConfigurationError',
    'Credentials',
    'GoogleSearchMCPError',
    'InvalidArgumentError',
    'ParseError',
    'Settings',
    'TransportError',
    'UpstreamError',
    'load_settings',
]
