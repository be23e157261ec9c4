"""Exceptions raised by the bond valuation core.

Every condition here is recoverable; callers showing results map them to an
empty state instead of failing.
"""


class BondCalculationError(Exception):
    """Base class for bond valuation errors."""


class InvalidFrequency(BondCalculationError, ValueError):
    """Coupon frequency is not a positive integer divisor of 12."""


class NonPositiveHorizon(BondCalculationError):
    """Maturity is not strictly after the evaluation date."""


class YieldNotFound(BondCalculationError, RuntimeError):
    """The yield iteration hit its cap without converging."""


class NoBracket(BondCalculationError, ValueError):
    """The bisection bracket does not straddle the price."""
