"""Decoding of Google Custom Search JSON responses."""

from pydantic import BaseModel, ConfigDict, ValidationError

from google_search_mcp.errors import ParseError

from .models import SearchResponse, SearchResultItem


class _CustomSearchPayload(BaseModel):
    """The subset of the Custom Search response body that we read."""

    model_config = ConfigDict(extra='ignore')

    items: list[SearchResultItem] | None = None


def parse_search_response(body: str | bytes) -> SearchResponse:
    """
    Parse a raw response body into a SearchResponse.

    A missing, null or empty ``items`` array is an empty response, not an
    error. Fields absent from an item decode to empty strings.

    Args:
        body: Raw JSON response body

    Returns:
        SearchResponse: Items in the order the provider returned them

    Raises:
        ParseError: If the body is not JSON or does not have the expected shape
    """
    try:
        payload = _CustomSearchPayload.model_validate_json(body)
    except ValidationError as e:
        raise ParseError(str(e)) from e

    return SearchResponse(items=tuple(payload.items or ()))
