"""Coupon and redemption schedule for a fixed-coupon bond."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

import pandas as pd

from ytmlib.utils.date import DateLike, step_back_months, to_date

from .frequency import months_between_payments, normalize_frequency
from .terms import BondTerms

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = ["date", "interest", "principal", "total"]


@dataclass(frozen=True)
class CashFlowEvent:
    """A single future payment.

    Attributes:
        date: Payment date
        interest_amount: Coupon paid on this date
        principal_amount: Redemption paid on this date (non-zero only at maturity)
    """

    date: date
    interest_amount: float
    principal_amount: float

    @property
    def total(self) -> float:
        return self.interest_amount + self.principal_amount


def payment_dates(
    maturity_date: DateLike, coupon_frequency: int, evaluation_date: DateLike
) -> List[date]:
    """Coupon dates strictly after the evaluation date, earliest first.

    Dates are generated backward from maturity. The k-th date is maturity
    minus k periods, always measured from maturity, so a month-end maturity
    keeps its day wherever the target month allows it.
    """
    step = months_between_payments(coupon_frequency)
    maturity = to_date(maturity_date)
    evaluation = to_date(evaluation_date)

    dates: List[date] = []
    periods_back = 0
    current = maturity
    while current > evaluation:
        dates.append(current)
        periods_back += 1
        current = step_back_months(maturity, step * periods_back)
    dates.reverse()
    return dates


def generate_schedule(
    maturity_date: DateLike,
    face_value: float,
    coupon_rate: float,
    coupon_frequency: int,
    evaluation_date: DateLike,
    quantity: int = 1,
) -> List[CashFlowEvent]:
    """Future cash flows of a bond, ascending by date.

    Args:
        maturity_date: Redemption date
        face_value: Redemption amount per unit
        coupon_rate: Annual coupon rate in percent
        coupon_frequency: Coupon payments per year (must divide 12)
        evaluation_date: Date the schedule is seen from; only later dates are kept
        quantity: Number of units; scales every amount

    Returns:
        One event per remaining coupon date. The event on the maturity date
        also carries the principal, so a bond in its final period has a
        single event with the last coupon and the principal. A matured bond
        has no events.

    Raises:
        InvalidFrequency: If coupon_frequency is not a positive divisor of 12
        ValueError: If face_value, coupon_rate or quantity is out of range
    """
    frequency = normalize_frequency(coupon_frequency)
    if face_value <= 0:
        raise ValueError("face_value must be positive")
    if coupon_rate < 0:
        raise ValueError("coupon_rate must be non-negative")
    if quantity < 1:
        raise ValueError("quantity must be at least 1")

    maturity = to_date(maturity_date)
    if maturity <= to_date(evaluation_date):
        return []

    principal = face_value * quantity
    dates = payment_dates(maturity, frequency, evaluation_date)
    if not dates:
        logger.debug("No payment date found before %s; principal-only schedule", maturity)
        return [CashFlowEvent(maturity, 0.0, principal)]

    coupon = face_value * (coupon_rate / 100) / frequency * quantity
    return [
        CashFlowEvent(dt, coupon, principal if dt == maturity else 0.0) for dt in dates
    ]


def schedule_for_terms(
    terms: BondTerms, evaluation_date: DateLike, quantity: int = 1
) -> List[CashFlowEvent]:
    return generate_schedule(
        terms.maturity_date,
        terms.face_value,
        terms.coupon_rate,
        terms.coupon_frequency,
        evaluation_date,
        quantity=quantity,
    )


def schedule_frame(events: Sequence[CashFlowEvent]) -> pd.DataFrame:
    """Tabular view of a schedule with date, interest, principal and total columns."""
    if not events:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    return pd.DataFrame(
        {
            "date": [ev.date for ev in events],
            "interest": [ev.interest_amount for ev in events],
            "principal": [ev.principal_amount for ev in events],
            "total": [ev.total for ev in events],
        }
    )


def payouts_by_year(events: Sequence[CashFlowEvent]) -> pd.DataFrame:
    """Interest, principal and total paid per calendar year, earliest year first."""
    frame = schedule_frame(events)
    if frame.empty:
        return pd.DataFrame(columns=["interest", "principal", "total"])
    frame["year"] = [dt.year for dt in frame["date"]]
    return frame.groupby("year", sort=True)[["interest", "principal", "total"]].sum()
