"""Bond yield and payout analytics.

This package values a fixed-coupon bond from its price and terms.

Key modules:
- bond: cash-flow schedule, yield-to-maturity solver, investment totals
- search: parsing and merging of records from an external bond lookup
- utils: calendar month arithmetic and root finding
- config: solver settings and default inputs
"""

from ytmlib.bond import (
    BondTerms,
    CashFlowEvent,
    YieldResult,
    evaluate_bond,
    generate_schedule,
    solve_yield,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BondTerms",
    "CashFlowEvent",
    "YieldResult",
    "generate_schedule",
    "solve_yield",
    "evaluate_bond",
]
