"""Pydantic models for search requests and Google Custom Search results."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RESULT_COUNT = 5
MAX_RESULT_COUNT = 10


class SearchRequest(BaseModel):
    """A validated search request for a single tool invocation."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(min_length=1, description='Search query text')
    result_count: int = Field(
        DEFAULT_RESULT_COUNT,
        ge=1,
        le=MAX_RESULT_COUNT,
        description='Number of results to request',
    )


class SearchResultItem(BaseModel):
    """Schema for a single search result from the Google Custom Search API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field('', description='Title of the search result')
    link: str = Field('', description='URL of the search result')
    snippet: str = Field('', description='Text snippet from the search result')
    display_link: str = Field(
        '', alias='displayLink', description='Abbreviated domain shown for the result'
    )

    @field_validator('title', 'link', 'snippet', 'display_link', mode='before')
    @classmethod
    def _null_as_empty(cls, value):
        return '' if value is None else value


class SearchResponse(BaseModel):
    """Ordered search results, in the relevance order returned by the provider."""

    model_config = ConfigDict(frozen=True)

    items: tuple[SearchResultItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @field_validator('items', mode='before')
    @classmethod
    def _null_as_empty(cls, value):
        return () if value is None else value
