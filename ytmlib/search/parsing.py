"""Prompt construction and response parsing for the bond lookup service."""

from __future__ import annotations

import json
import re
from typing import List, Optional

from .records import BondSearchResult

_JSON_BLOCK = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL)

_PROMPT_TEMPLATE = """You are a financial data service. Find bond details for "{term}" maturing around {year}. Use web search for the most up-to-date information.
Return a JSON array of objects with the following keys: "isin", "name", "faceValue", "marketPrice", "couponRate", "couponFrequency" (1 for annual, 2 for semi-annual, 4 for quarterly, 12 for monthly), and "maturityDate" (in "YYYY-MM-DD" format).
If you cannot find a value, use null. Ensure the response is ONLY the JSON array inside a JSON code block. Example:
```json
[
  {{
    "isin": "INE020B08AL0",
    "name": "REC 8.75 2024",
    "faceValue": 1000,
    "marketPrice": 1001.5,
    "couponRate": 8.75,
    "couponFrequency": 1,
    "maturityDate": "2024-12-21"
  }}
]
```
"""


class SearchError(Exception):
    """Base class for bond lookup failures."""


class EmptyResponseError(SearchError):
    """The service returned no text."""


class UnparseableResponseError(SearchError):
    """The response has no usable JSON array."""


class NoResultsError(SearchError):
    """The response parsed but listed no bonds."""


def build_search_prompt(search_term: str, maturity_year: Optional[int] = None) -> str:
    return _PROMPT_TEMPLATE.format(
        term=search_term.strip(), year=maturity_year if maturity_year else "any year"
    )


def parse_search_response(text: Optional[str]) -> List[BondSearchResult]:
    """Extract candidate bonds from the fenced JSON block of a service response.

    Entries that are not JSON objects are dropped; field values are kept raw
    and validated only when applied to bond terms.
    """
    if not text or not text.strip():
        raise EmptyResponseError("Received an empty response")

    match = _JSON_BLOCK.search(text)
    if match is None:
        raise UnparseableResponseError("No JSON code block in the response")
    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise UnparseableResponseError(f"Invalid JSON in the response: {exc}") from exc
    if not isinstance(payload, list):
        raise UnparseableResponseError("Expected a JSON array of bonds")

    results = [BondSearchResult.from_record(item) for item in payload if isinstance(item, dict)]
    if not results:
        raise NoResultsError("No bonds found matching the search")
    return results
