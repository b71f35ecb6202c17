"""Client for the Google Custom Search JSON API."""

from __future__ import annotations

import httpx
from loguru import logger

from google_search_mcp.config import Credentials
from google_search_mcp.errors import TransportError, UpstreamError

from .models import SearchRequest, SearchResponse
from .parser import parse_search_response

CUSTOM_SEARCH_URL = 'https://www.googleapis.com/customsearch/v1'


class GoogleSearchClient:
    """Client for performing web searches via Google Custom Search.

    One ``search`` call issues exactly one GET request. Failures are raised
    to the caller; nothing is retried.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = CUSTOM_SEARCH_URL,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self.credentials = credentials
        self.base_url = base_url
        self.client = http_client or httpx.Client(timeout=timeout)

    def build_params(self, request: SearchRequest) -> dict[str, str]:
        """Build the query parameters for a search request."""
        return {
            'key': self.credentials.api_key,
            'cx': self.credentials.search_engine_id,
            'q': request.query,
            'num': str(request.result_count),
        }

    def search(self, request: SearchRequest) -> SearchResponse:
        """
        Run a search and return the parsed results.

        Args:
            request: Validated search request

        Returns:
            SearchResponse: Parsed results in provider order

        Raises:
            TransportError: If the request could not be sent or completed
            UpstreamError: If the API answers with a non-200 status
            ParseError: If the response body cannot be decoded
        """
        logger.debug(
            f"Google search: q='{request.query}' num={request.result_count}"
        )
        try:
            response = self.client.get(self.base_url, params=self.build_params(request))
        except httpx.RequestError as e:
            logger.error(f'Google search request failed: {e}')
            raise TransportError(e) from e

        if response.status_code != httpx.codes.OK:
            logger.error(f'Google search returned status {response.status_code}')
            raise UpstreamError(response.status_code, response.text)

        results = parse_search_response(response.content)
        logger.debug(f'Google search returned {len(results.items)} results')
        return results

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> GoogleSearchClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
