"""Unit tests for GoogleSearchClient using respx-mocked HTTP."""

import httpx
import pytest
import respx

from google_search_mcp.errors import ParseError, TransportError, UpstreamError
from google_search_mcp.search import (
    CUSTOM_SEARCH_URL,
    GoogleSearchClient,
    SearchRequest,
)


def test_build_params(search_client):
    params = search_client.build_params(SearchRequest(query='python', result_count=3))

    assert params == {'key': 'test-key', 'cx': 'test-cx', 'q': 'python', 'num': '3'}


class TestSearch:
    """Tests for GoogleSearchClient.search."""

    @respx.mock
    def test_success_returns_parsed_items(self, search_client, sample_payload):
        route = respx.get(CUSTOM_SEARCH_URL).mock(
            return_value=httpx.Response(200, json=sample_payload)
        )

        response = search_client.search(SearchRequest(query='python', result_count=2))

        assert route.call_count == 1
        assert [item.display_link for item in response.items] == [
            'www.python.org',
            'en.wikipedia.org',
        ]

    @respx.mock
    def test_query_parameters_are_sent_encoded(self, search_client):
        route = respx.get(CUSTOM_SEARCH_URL).mock(
            return_value=httpx.Response(200, json={})
        )

        search_client.search(SearchRequest(query='c++ & rust?', result_count=7))

        request = route.calls.last.request
        assert request.method == 'GET'
        assert request.url.params['key'] == 'test-key'
        assert request.url.params['cx'] == 'test-cx'
        assert request.url.params['q'] == 'c++ & rust?'
        assert request.url.params['num'] == '7'
        assert b'c++ & rust?' not in request.url.raw_path

    @respx.mock
    def test_empty_result_set(self, search_client):
        respx.get(CUSTOM_SEARCH_URL).mock(return_value=httpx.Response(200, json={}))

        response = search_client.search(SearchRequest(query='zzzz'))

        assert response.items == ()

    @respx.mock
    def test_non_200_raises_upstream_error(self, search_client):
        route = respx.get(CUSTOM_SEARCH_URL).mock(
            return_value=httpx.Response(403, text='quota exceeded')
        )

        with pytest.raises(UpstreamError) as exc_info:
            search_client.search(SearchRequest(query='python'))

        err = exc_info.value
        assert err.status_code == 403
        assert err.body == 'quota exceeded'
        assert '403' in str(err)
        assert 'quota exceeded' in str(err)
        assert route.call_count == 1

    @pytest.mark.parametrize('status_code', [201, 204, 301, 400, 429, 500, 503])
    @respx.mock
    def test_any_other_status_is_a_failure_and_not_retried(
        self, search_client, status_code
    ):
        route = respx.get(CUSTOM_SEARCH_URL).mock(
            return_value=httpx.Response(status_code, text='nope')
        )

        with pytest.raises(UpstreamError):
            search_client.search(SearchRequest(query='python'))

        assert route.call_count == 1

    @pytest.mark.parametrize(
        'exc',
        [
            httpx.ConnectError('Connection refused'),
            httpx.ConnectTimeout('timed out'),
            httpx.ReadTimeout('timed out'),
            httpx.DecodingError('incorrect header check'),
            httpx.TooManyRedirects('Exceeded maximum allowed redirects.'),
        ],
    )
    @respx.mock
    def test_transport_failures_raise_transport_error(self, search_client, exc):
        route = respx.get(CUSTOM_SEARCH_URL).mock(side_effect=exc)

        with pytest.raises(TransportError) as exc_info:
            search_client.search(SearchRequest(query='python'))

        assert exc_info.value.__cause__ is exc
        assert exc_info.value.cause is exc
        assert str(exc_info.value).startswith('HTTP request failed: ')
        assert route.call_count == 1

    @respx.mock
    def test_malformed_body_raises_parse_error(self, search_client):
        respx.get(CUSTOM_SEARCH_URL).mock(
            return_value=httpx.Response(200, text='{"items": [')
        )

        with pytest.raises(ParseError):
            search_client.search(SearchRequest(query='python'))


@respx.mock
def test_custom_base_url(credentials):
    route = respx.get('http://search.local/v1').mock(
        return_value=httpx.Response(200, json={})
    )

    with GoogleSearchClient(credentials, base_url='http://search.local/v1') as client:
        client.search(SearchRequest(query='python'))

    assert route.called


def test_context_manager_closes_client(credentials):
    with GoogleSearchClient(credentials) as client:
        assert not client.client.is_closed

    assert client.client.is_closed
