"""Google Search MCP error system."""

from google_search_mcp.errors.base import (
    ConfigurationError,
    GoogleSearchMCPError,
    InvalidArgumentError,
    ParseError,
    TransportError,
    UpstreamError,
)

__all__ = [
    'ConfigurationError',
    'GoogleSearchMCPError',
    'InvalidArgumentError',
    'ParseError',
    'TransportError',
    'UpstreamError',
]
