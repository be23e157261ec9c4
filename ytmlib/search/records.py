"""Candidate bond records returned by the lookup service."""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ytmlib.bond.errors import InvalidFrequency
from ytmlib.bond.frequency import normalize_frequency
from ytmlib.bond.terms import BondTerms
from ytmlib.utils.date import to_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BondSearchResult:
    """One candidate bond as reported by the service.

    Values are kept exactly as received; they may be missing, null, strings
    or otherwise malformed.
    """

    isin: str = ""
    name: str = ""
    face_value: Any = None
    market_price: Any = None
    coupon_rate: Any = None
    coupon_frequency: Any = None
    maturity_date: Any = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BondSearchResult":
        return cls(
            isin=str(record.get("isin") or ""),
            name=str(record.get("name") or ""),
            face_value=record.get("faceValue"),
            market_price=record.get("marketPrice"),
            coupon_rate=record.get("couponRate"),
            coupon_frequency=record.get("couponFrequency"),
            maturity_date=record.get("maturityDate"),
        )


def _parse_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _positive(value: Any, previous: float) -> float:
    number = _parse_number(value)
    return number if number is not None and number > 0 else previous


def _non_negative(value: Any, previous: float) -> float:
    number = _parse_number(value)
    return number if number is not None and number >= 0 else previous


def _frequency(value: Any, previous: int) -> int:
    number = _parse_number(value)
    if number is None:
        return previous
    try:
        return normalize_frequency(number)
    except InvalidFrequency:
        return previous


def _maturity(value: Any, previous: date) -> date:
    if not isinstance(value, str):
        return previous
    try:
        return to_date(value)
    except ValueError:
        return previous


def apply_search_result(terms: BondTerms, result: BondSearchResult) -> BondTerms:
    """Merge a search result into the held terms field by field.

    A field that is missing or malformed in the result keeps its previous
    value; the rest of the record is still applied.
    """
    updated = dataclasses.replace(
        terms,
        face_value=_positive(result.face_value, terms.face_value),
        market_price=_positive(result.market_price, terms.market_price),
        coupon_rate=_non_negative(result.coupon_rate, terms.coupon_rate),
        coupon_frequency=_frequency(result.coupon_frequency, terms.coupon_frequency),
        maturity_date=_maturity(result.maturity_date, terms.maturity_date),
    )
    if updated != terms:
        logger.debug("Applied search result %s (%s): %s", result.isin, result.name, updated)
    return updated
