"""Tests for the error system."""

import httpx

from google_search_mcp.errors import (
    ConfigurationError,
    GoogleSearchMCPError,
    InvalidArgumentError,
    ParseError,
    TransportError,
    UpstreamError,
)


def test_error_creation_and_properties() -> None:
    """Ensure errors store provided properties."""
    err = GoogleSearchMCPError(
        error_code='E001',
        message='Test error',
        recoverable=True,
        context={'foo': 'bar'},
    )

    assert err.error_code == 'E001'
    assert err.message == 'Test error'
    assert err.recoverable is True
    assert err.context == {'foo': 'bar'}
    assert str(err) == 'Test error'


def test_error_serialization() -> None:
    """Errors should serialize to dictionaries."""
    err = InvalidArgumentError('query must be a non-empty string')
    result = err.to_dict()

    assert result['error_code'] == 'INVALID_ARGUMENT'
    assert result['message'] == 'query must be a non-empty string'
    assert result['recoverable'] is False
    assert result['context'] == {}


def test_upstream_error_carries_status_and_body() -> None:
    err = UpstreamError(403, 'quota exceeded')

    assert err.status_code == 403
    assert err.body == 'quota exceeded'
    assert str(err) == 'API returned non-200 status: 403 - quota exceeded'
    assert err.to_dict()['context'] == {'status_code': 403, 'body': 'quota exceeded'}


def test_transport_error_carries_cause() -> None:
    cause = httpx.ConnectError('Name or service not known')
    err = TransportError(cause)

    assert err.cause is cause
    assert err.error_code == 'TRANSPORT_ERROR'
    assert 'Name or service not known' in str(err)


def test_parse_error_message() -> None:
    err = ParseError('Invalid JSON')

    assert err.detail == 'Invalid JSON'
    assert str(err) == 'failed to parse API response: Invalid JSON'


def test_all_errors_share_base() -> None:
    for err in (
        InvalidArgumentError('x'),
        TransportError(httpx.ReadTimeout('slow')),
        UpstreamError(500, ''),
        ParseError('x'),
        ConfigurationError('x'),
    ):
        assert isinstance(err, GoogleSearchMCPError)
