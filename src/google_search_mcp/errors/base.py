"""Structured error classes for the Google Search MCP server."""

from __future__ import annotations

from typing import Any


class GoogleSearchMCPError(Exception):
    """Base exception for all server errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        recoverable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.recoverable = recoverable
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize error details to a dictionary."""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


class InvalidArgumentError(GoogleSearchMCPError):
    """Raised when caller-supplied tool arguments fail validation."""

    def __init__(self, message: str) -> None:
        super().__init__('INVALID_ARGUMENT', message)


class TransportError(GoogleSearchMCPError):
    """Raised when the search provider cannot be reached."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(
            'TRANSPORT_ERROR',
            f'HTTP request failed: {cause}',
            context={'cause': repr(cause)},
        )
        self.cause = cause


class UpstreamError(GoogleSearchMCPError):
    """Raised when the search provider answers with a non-200 status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            'UPSTREAM_ERROR',
            f'API returned non-200 status: {status_code} - {body}',
            context={'status_code': status_code, 'body': body},
        )
        self.status_code = status_code
        self.body = body


class ParseError(GoogleSearchMCPError):
    """Raised when the provider's response body is not the expected JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            'PARSE_ERROR',
            f'failed to parse API response: {detail}',
            context={'detail': detail},
        )
        self.detail = detail


class ConfigurationError(GoogleSearchMCPError):
    """Raised at startup when required configuration is missing."""

    def __init__(self, message: str) -> None:
        super().__init__('CONFIGURATION_ERROR', message)
