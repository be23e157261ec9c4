"""Bond input record shared by the schedule generator and the yield solver."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ytmlib.utils.date import DateLike, to_date, years_between

from .frequency import normalize_frequency

# camelCase keys used by search records and UI state -> field names
_FIELD_ALIASES = {
    "faceValue": "face_value",
    "marketPrice": "market_price",
    "couponRate": "coupon_rate",
    "couponFrequency": "coupon_frequency",
    "maturityDate": "maturity_date",
}


@dataclass(frozen=True)
class BondTerms:
    """Per-unit terms of a fixed-coupon bond.

    Attributes:
        face_value: Redemption amount per unit
        market_price: Current price per unit
        coupon_rate: Annual coupon rate in percent (e.g., 9.0); zero for zero-coupon bonds
        coupon_frequency: Coupon payments per year (1, 2, 4 or 12)
        maturity_date: Redemption date
    """

    face_value: float
    market_price: float
    coupon_rate: float
    coupon_frequency: int
    maturity_date: date

    def __post_init__(self) -> None:
        face_value = float(self.face_value)
        market_price = float(self.market_price)
        coupon_rate = float(self.coupon_rate)
        if not math.isfinite(face_value) or face_value <= 0:
            raise ValueError("face_value must be positive")
        if not math.isfinite(market_price) or market_price <= 0:
            raise ValueError("market_price must be positive")
        if not math.isfinite(coupon_rate) or coupon_rate < 0:
            raise ValueError("coupon_rate must be non-negative")

        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "face_value", face_value)
        object.__setattr__(self, "market_price", market_price)
        object.__setattr__(self, "coupon_rate", coupon_rate)
        object.__setattr__(self, "coupon_frequency", normalize_frequency(self.coupon_frequency))
        object.__setattr__(self, "maturity_date", to_date(self.maturity_date))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BondTerms":
        """Build terms from a mapping keyed by field name or its camelCase alias."""
        fields = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in _FIELD_ALIASES.values():
                fields[name] = value
        return cls(**fields)

    @property
    def coupon_amount(self) -> float:
        """Per-period coupon per unit."""
        return self.face_value * (self.coupon_rate / 100) / self.coupon_frequency

    def years_to_maturity(self, evaluation_date: DateLike) -> float:
        return years_between(evaluation_date, self.maturity_date)
