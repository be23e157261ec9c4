"""Yield-to-maturity solver for fixed-coupon bonds."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ytmlib.config import SolverSettings, load_solver_settings
from ytmlib.utils.date import DateLike
from ytmlib.utils.rootfinding import (
    BracketError,
    ConvergenceError,
    NewtonBisectSolver,
    SolverMode,
)

from .errors import BondCalculationError, NonPositiveHorizon, NoBracket, YieldNotFound
from .frequency import normalize_frequency
from .terms import BondTerms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YieldResult:
    """Solved yield of a bond at its market price.

    Attributes:
        periodic_yield: Yield per coupon period (decimal)
        annual_yield: Nominal annual yield, periodic_yield * frequency
        effective_annual_yield: Compounded annual yield
        total_coupon_payments: Undiscounted coupons still to be received, per unit
        periods: Coupon periods to maturity used for discounting
        iterations: Solver iterations spent
        method: Solver mode that produced the root ("newton" or "bisection")
    """

    periodic_yield: float
    annual_yield: float
    effective_annual_yield: float
    total_coupon_payments: float
    periods: int
    iterations: int = 0
    method: str = SolverMode.NEWTON.value

    @property
    def monthly_rate(self) -> float:
        """Effective annual yield expressed as a compounded monthly rate."""
        return (1.0 + self.effective_annual_yield) ** (1.0 / 12.0) - 1.0


def periods_to_maturity(years_to_maturity: float, coupon_frequency: int) -> int:
    """Whole coupon periods left, rounded half up."""
    return int(math.floor(years_to_maturity * coupon_frequency + 0.5))


def _price_and_derivative(
    coupon: float, face_value: float, periods: int, periodic_yield: float
) -> Tuple[float, float]:
    base = 1.0 + periodic_yield
    if base <= 0.0:
        raise ValueError("periodic yield must be greater than -100%")
    k = np.arange(1, periods + 1, dtype=float)
    with np.errstate(over="ignore"):
        discount = np.power(base, -k)
        price = face_value * discount[-1]
        slope = face_value * periods * discount[-1]
        # skipped for zero coupons: 0 * inf would poison the sum near r = -1
        if coupon:
            price += coupon * discount.sum()
            slope += coupon * (k * discount).sum()
    return float(price), float(-slope / base)


def price_from_yield(
    face_value: float,
    coupon_rate: float,
    coupon_frequency: int,
    periods: int,
    periodic_yield: float,
) -> float:
    """Present value of the remaining coupons and redemption at a periodic yield.

    coupon_rate is the annual rate in percent; periodic_yield is a decimal.
    """
    frequency = normalize_frequency(coupon_frequency)
    if periods < 1:
        raise ValueError("periods must be at least 1")
    coupon = face_value * (coupon_rate / 100) / frequency
    return _price_and_derivative(coupon, face_value, periods, periodic_yield)[0]


def price_tolerance(settings: SolverSettings, market_price: float) -> float:
    """Absolute price tolerance: the relative setting scaled by the price."""
    if not math.isfinite(market_price):
        return settings.tolerance
    return settings.tolerance * max(1.0, abs(market_price))


def initial_yield_guess(
    face_value: float, market_price: float, coupon: float, periods: int
) -> float:
    """Closed-form YTM approximation used to seed Newton (per period)."""
    return (coupon + (face_value - market_price) / periods) / ((face_value + market_price) / 2)


def solve_yield(
    face_value: float,
    market_price: float,
    coupon_rate: float,
    coupon_frequency: int,
    years_to_maturity: float,
    settings: Optional[SolverSettings] = None,
) -> YieldResult:
    """Solve the yield that discounts the bond's cash flows to its market price.

    Finds the periodic rate r with

        market_price = sum_{k=1..n} C / (1+r)^k + face_value / (1+r)^n

    where n = round(years_to_maturity * coupon_frequency) and
    C = face_value * coupon_rate / 100 / coupon_frequency. A horizon shorter
    than half a period still counts as one period paying the last coupon and
    the principal, as the schedule generator does for a bond in its final
    period. Convergence is |PV(r) - market_price| < tolerance * max(1, market_price).

    Raises:
        InvalidFrequency: If coupon_frequency is not a positive divisor of 12
        NonPositiveHorizon: If years_to_maturity <= 0
        NoBracket: If the bisection bracket does not straddle the price
        YieldNotFound: If the iteration cap is reached
    """
    frequency = normalize_frequency(coupon_frequency)
    if not years_to_maturity > 0:
        raise NonPositiveHorizon(f"years_to_maturity must be positive, got {years_to_maturity}")
    if face_value <= 0:
        raise ValueError("face_value must be positive")
    if coupon_rate < 0:
        raise ValueError("coupon_rate must be non-negative")
    settings = settings or load_solver_settings()

    coupon = face_value * (coupon_rate / 100) / frequency
    periods = max(1, periods_to_maturity(years_to_maturity, frequency))

    def func_and_deriv(r: float) -> Tuple[float, float]:
        price, deriv = _price_and_derivative(coupon, face_value, periods, r)
        return price - market_price, deriv

    solver = NewtonBisectSolver(
        func_and_deriv,
        tol_value=price_tolerance(settings, market_price),
        max_iter=settings.max_iterations,
        bracket=settings.bracket,
        domain_floor=-1.0,
    )
    if math.isfinite(market_price) and market_price > 0:
        mode = SolverMode.NEWTON
        guess = initial_yield_guess(face_value, market_price, coupon, periods)
    else:
        # no root exists; let the bracket check report it
        mode = SolverMode.BISECTION
        guess = 0.0

    try:
        result = solver.solve(guess, mode=mode)
    except BracketError as exc:
        logger.error("Yield bracket check failed: %s", exc)
        raise NoBracket(str(exc)) from exc
    except ConvergenceError as exc:
        logger.error("Yield solver did not converge: %s", exc)
        raise YieldNotFound(str(exc)) from exc
    logger.debug("Yield solved after %s iterations via %s", result.iterations, result.method)

    r = result.root
    return YieldResult(
        periodic_yield=r,
        annual_yield=r * frequency,
        effective_annual_yield=(1.0 + r) ** frequency - 1.0,
        total_coupon_payments=coupon * periods,
        periods=periods,
        iterations=result.iterations,
        method=result.method,
    )


def evaluate_bond(
    terms: BondTerms,
    evaluation_date: DateLike,
    settings: Optional[SolverSettings] = None,
) -> Optional[YieldResult]:
    """Yield for a set of bond terms, or None when no yield can be shown.

    A maturity on or before the evaluation date and every solver failure
    give None.
    """
    years = terms.years_to_maturity(evaluation_date)
    if years <= 0:
        logger.debug("Maturity %s is not after %s; no yield", terms.maturity_date, evaluation_date)
        return None
    try:
        return solve_yield(
            terms.face_value,
            terms.market_price,
            terms.coupon_rate,
            terms.coupon_frequency,
            years,
            settings=settings,
        )
    except BondCalculationError as exc:
        logger.warning("No yield for %s: %s", terms, exc)
        return None
