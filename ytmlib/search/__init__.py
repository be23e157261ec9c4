"""External bond lookup: prompt, parsing and merging into bond terms."""

from .base import SearchProvider, SearchServiceError, search_bonds
from .parsing import (
    EmptyResponseError,
    NoResultsError,
    SearchError,
    UnparseableResponseError,
    build_search_prompt,
    parse_search_response,
)
from .records import BondSearchResult, apply_search_result

__all__ = [
    "SearchProvider",
    "BondSearchResult",
    "search_bonds",
    "build_search_prompt",
    "parse_search_response",
    "apply_search_result",
    "SearchError",
    "SearchServiceError",
    "EmptyResponseError",
    "UnparseableResponseError",
    "NoResultsError",
]
