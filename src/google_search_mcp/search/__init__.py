"""
Search pipeline: argument validation, the Custom Search client, response
parsing and result formatting.
"""

from .client import CUSTOM_SEARCH_URL, GoogleSearchClient
from .formatter import NO_RESULTS_TEXT, format_search_results
from .models import (
    DEFAULT_RESULT_COUNT,
    MAX_RESULT_COUNT,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
)
from .parser import parse_search_response
from .validation import resolve_result_count, validate_search_arguments

__all__ = [
    'CUSTOM_SEARCH_URL',
    'DEFAULT_RESULT_COUNT',
    'MAX_RESULT_COUNT',
    'NO_RESULTS_TEXT',
    'GoogleSearchClient',
    'SearchRequest',
    'SearchResponse',
    'SearchResultItem',
    'format_search_results',
    'parse_search_response',
    'resolve_result_count',
    'validate_search_arguments',
]
