"""Aggregate investment figures for a position in a bond."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .terms import BondTerms
from .ytm import YieldResult


@dataclass(frozen=True)
class InvestmentSummary:
    amount_to_invest: float = 0.0
    total_coupon_payments: float = 0.0
    tds_amount: float = 0.0
    maturity_amount: float = 0.0
    total_receivable: float = 0.0
    pre_tax_profit: float = 0.0
    post_tax_profit: float = 0.0
    monthly_rate: float = 0.0


def summarize_investment(
    terms: BondTerms,
    result: Optional[YieldResult],
    quantity: int = 1,
    tds_rate: float = 0.0,
) -> InvestmentSummary:
    """Totals for holding ``quantity`` units to maturity.

    Coupons are taxed at the flat withholding rate ``tds_rate`` (percent);
    the redemption is not. Without a yield result every figure is zero.
    """
    if quantity < 1:
        raise ValueError("quantity must be at least 1")
    if not 0.0 <= tds_rate <= 100.0:
        raise ValueError("tds_rate must be between 0 and 100")
    if result is None:
        return InvestmentSummary()

    amount_to_invest = terms.market_price * quantity
    total_coupons = result.total_coupon_payments * quantity
    tds_amount = total_coupons * (tds_rate / 100)
    maturity_amount = terms.face_value * quantity
    total_receivable = (total_coupons - tds_amount) + maturity_amount

    return InvestmentSummary(
        amount_to_invest=amount_to_invest,
        total_coupon_payments=total_coupons,
        tds_amount=tds_amount,
        maturity_amount=maturity_amount,
        total_receivable=total_receivable,
        pre_tax_profit=(total_coupons + maturity_amount) - amount_to_invest,
        post_tax_profit=total_receivable - amount_to_invest,
        monthly_rate=result.monthly_rate,
    )
