"""
Tool argument validation.

Turns the untyped ``arguments`` mapping of a ``tools/call`` request into a
typed :class:`SearchRequest`. This is the only place the raw mapping is read.
"""

import math
from collections.abc import Mapping
from typing import Any

from google_search_mcp.errors import InvalidArgumentError

from .models import DEFAULT_RESULT_COUNT, MAX_RESULT_COUNT, SearchRequest


def resolve_result_count(value: Any) -> int:
    """
    Resolve the ``num_results`` argument to a result count.

    Numeric values are truncated to an int. Values outside ``[1, 10]``
    (including zero and negatives) resolve to the maximum, not the default.
    Missing or non-numeric values resolve to the default.

    Args:
        value: Raw ``num_results`` value, or None when absent

    Returns:
        int: Result count in ``[1, 10]``
    """
    # bool is an int subclass but is not a JSON number
    if isinstance(value, bool) or not isinstance(value, int | float):
        return DEFAULT_RESULT_COUNT
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_RESULT_COUNT

    count = int(value)
    # Out-of-range values clamp to the maximum, below 1 included.
    if count < 1 or count > MAX_RESULT_COUNT:
        return MAX_RESULT_COUNT
    return count


def validate_search_arguments(arguments: Mapping[str, Any] | None) -> SearchRequest:
    """
    Validate ``google_search`` tool arguments.

    Args:
        arguments: Raw tool call arguments

    Returns:
        SearchRequest: Validated request

    Raises:
        InvalidArgumentError: If ``query`` is missing, not a string or empty
    """
    arguments = arguments or {}

    query = arguments.get('query')
    if not isinstance(query, str) or query == '':
        raise InvalidArgumentError('query must be a non-empty string')

    return SearchRequest(
        query=query,
        result_count=resolve_result_count(arguments.get('num_results')),
    )
