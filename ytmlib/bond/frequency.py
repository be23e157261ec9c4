"""Coupon frequency conventions."""

from __future__ import annotations

import numbers
from enum import Enum

from .errors import InvalidFrequency

MONTHS_PER_YEAR = 12


class CouponFrequency(Enum):
    """Supported coupon payment frequencies (payments per year)."""

    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    CouponFrequency.ANNUAL: "Annually",
    CouponFrequency.SEMIANNUAL: "Semi-Annually",
    CouponFrequency.QUARTERLY: "Quarterly",
    CouponFrequency.MONTHLY: "Monthly",
}


def normalize_frequency(frequency: int | float | CouponFrequency) -> int:
    """Return the frequency as an int, rejecting anything that does not divide 12."""
    if isinstance(frequency, CouponFrequency):
        return frequency.value
    if isinstance(frequency, bool) or not isinstance(frequency, numbers.Real):
        raise InvalidFrequency(f"Coupon frequency must be a number, got {frequency!r}")
    if not isinstance(frequency, numbers.Integral) and not float(frequency).is_integer():
        raise InvalidFrequency(f"Coupon frequency must be an integer, got {frequency!r}")
    frequency = int(frequency)
    if frequency <= 0 or MONTHS_PER_YEAR % frequency != 0:
        raise InvalidFrequency(
            f"Coupon frequency must be a positive divisor of 12, got {frequency}"
        )
    return frequency


def months_between_payments(frequency: int | float | CouponFrequency) -> int:
    """Calendar months separating consecutive coupon dates."""
    return MONTHS_PER_YEAR // normalize_frequency(frequency)
