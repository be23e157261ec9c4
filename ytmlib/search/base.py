"""Interface to the external bond lookup service."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, runtime_checkable

from .parsing import SearchError, build_search_prompt, parse_search_response
from .records import BondSearchResult

logger = logging.getLogger(__name__)


class SearchServiceError(SearchError):
    """The lookup service could not be reached or failed."""


@runtime_checkable
class SearchProvider(Protocol):
    """
    Protocol for text-generating lookup services.

    Any client able to answer a free-text prompt (a hosted generative model
    with web search, a canned fixture in tests) fits.
    """

    def generate(self, prompt: str) -> str:
        """
        Answer a prompt.

        Args:
            prompt: Instruction text built by build_search_prompt

        Returns:
            Raw response text
        """
        ...


def search_bonds(
    provider: SearchProvider,
    search_term: str,
    maturity_year: Optional[int] = None,
) -> List[BondSearchResult]:
    """Look up candidate bonds by name or ISIN.

    Raises:
        ValueError: If search_term is blank
        SearchServiceError: If the provider call fails
        SearchError: If the response is empty, unparseable or lists no bonds
    """
    if not search_term or not search_term.strip():
        raise ValueError("Please enter a search term")

    prompt = build_search_prompt(search_term, maturity_year)
    try:
        text = provider.generate(prompt)
    except Exception as exc:
        logger.error("Bond lookup failed for %r: %s", search_term, exc)
        raise SearchServiceError(f"Bond lookup failed: {exc}") from exc
    results = parse_search_response(text)
    logger.info("Bond lookup for %r returned %s candidates", search_term, len(results))
    return results
