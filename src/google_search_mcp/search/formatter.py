"""Plain-text rendering of search results for the calling model."""

from .models import SearchResponse

NO_RESULTS_TEXT = 'No results found.'


def format_search_results(response: SearchResponse) -> str:
    """Render results as the numbered text block returned to the caller."""
    if response.is_empty:
        return NO_RESULTS_TEXT

    parts = [f'Found {len(response.items)} results:\n\n']
    for i, item in enumerate(response.items, 1):
        parts.append(f'{i}. {item.title}\n')
        parts.append(f'   URL: {item.link}\n')
        parts.append(f'   {item.snippet}\n\n')

    return ''.join(parts)
