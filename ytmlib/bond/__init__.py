"""Bond valuation public API."""

from .errors import (
    BondCalculationError,
    InvalidFrequency,
    NoBracket,
    NonPositiveHorizon,
    YieldNotFound,
)
from .frequency import CouponFrequency, months_between_payments
from .investment import InvestmentSummary, summarize_investment
from .schedule import (
    CashFlowEvent,
    generate_schedule,
    payouts_by_year,
    schedule_for_terms,
    schedule_frame,
)
from .terms import BondTerms
from .ytm import YieldResult, evaluate_bond, price_from_yield, solve_yield

__all__ = [
    "BondTerms",
    "CashFlowEvent",
    "CouponFrequency",
    "InvestmentSummary",
    "YieldResult",
    "generate_schedule",
    "schedule_for_terms",
    "schedule_frame",
    "payouts_by_year",
    "solve_yield",
    "evaluate_bond",
    "price_from_yield",
    "summarize_investment",
    "months_between_payments",
    "BondCalculationError",
    "InvalidFrequency",
    "NonPositiveHorizon",
    "YieldNotFound",
    "NoBracket",
]
