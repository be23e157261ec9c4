"""Root-finding utilities (Newton-Raphson with a bisection fallback).

The solver is a two-state machine. It starts in ``NEWTON`` mode and switches
to ``BISECTION`` when a Newton step is unusable (zero or non-finite
derivative, or an iterate outside the domain). The switch is one-way and the
iteration budget is shared between the two modes.

The objective is assumed strictly decreasing, which is what bond price minus
market price looks like as a function of yield.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

logger = logging.getLogger(__name__)

FuncDeriv = Callable[[float], Tuple[float, float]]


class SolverMode(Enum):
    NEWTON = "newton"
    BISECTION = "bisection"


@dataclass(frozen=True)
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str
    value: float


class RootFindingError(RuntimeError):
    """Base class for root-finding failures."""


class ConvergenceError(RootFindingError):
    """Raised when the iteration budget runs out before convergence."""


class BracketError(RootFindingError):
    """Raised when the bisection bracket does not straddle the root."""


class NewtonBisectSolver:
    """Newton-Raphson root finder that falls back to bisection.

    Parameters
    ----------
    func_and_deriv:
        Callable returning (value, derivative) at a given point.
    tol_value:
        Absolute tolerance on the function value.
    max_iter:
        Iteration cap shared by both modes.
    bracket:
        (lower, upper) used by bisection; must satisfy f(lower) > 0 > f(upper).
    domain_floor:
        Iterates at or below this value are outside the domain.
    """

    def __init__(
        self,
        func_and_deriv: FuncDeriv,
        *,
        tol_value: float = 1e-6,
        max_iter: int = 100,
        bracket: Tuple[float, float] = (-0.99, 10.0),
        domain_floor: float = -1.0,
    ):
        self.func_and_deriv = func_and_deriv
        self.tol_value = float(tol_value)
        self.max_iter = int(max_iter)
        self.bracket = (float(bracket[0]), float(bracket[1]))
        self.domain_floor = float(domain_floor)
        self.mode = SolverMode.NEWTON
        self.iterations = 0

    def _value(self, x: float) -> float:
        return self.func_and_deriv(x)[0]

    def _in_domain(self, x: float) -> bool:
        return math.isfinite(x) and x > self.domain_floor

    def solve(self, initial_guess: float, mode: SolverMode = SolverMode.NEWTON) -> RootResult:
        self.mode = mode
        self.iterations = 0
        if self.mode is SolverMode.NEWTON:
            result = self._newton(float(initial_guess))
            if result is not None:
                return result
        return self._bisect()

    def _newton(self, x: float) -> RootResult | None:
        """Run Newton steps; ``None`` means the machine moved to bisection."""
        if not self._in_domain(x):
            logger.debug("Initial guess %s outside domain; switching to bisection", x)
            self.mode = SolverMode.BISECTION
            return None

        while self.iterations < self.max_iter:
            self.iterations += 1
            value, deriv = self.func_and_deriv(x)
            logger.debug(
                "Newton iter %s: x=%s value=%s deriv=%s", self.iterations, x, value, deriv
            )
            if abs(value) < self.tol_value:
                return RootResult(x, self.iterations, True, self.mode.value, value)
            if deriv == 0.0 or not math.isfinite(deriv):
                logger.debug("Unusable derivative at iter %s; switching to bisection", self.iterations)
                self.mode = SolverMode.BISECTION
                return None
            x_new = x - value / deriv
            if not self._in_domain(x_new):
                logger.debug(
                    "Newton step to %s leaves the domain at iter %s; switching to bisection",
                    x_new,
                    self.iterations,
                )
                self.mode = SolverMode.BISECTION
                return None
            x = x_new

        raise ConvergenceError(f"Newton failed to converge within {self.max_iter} iterations")

    def _bisect(self) -> RootResult:
        lower, upper = self.bracket
        f_lower = self._value(lower)
        f_upper = self._value(upper)
        if not (f_lower > 0.0 > f_upper):
            raise BracketError(
                f"Bracket [{lower}, {upper}] does not contain a root: "
                f"f(lower)={f_lower:.6e}, f(upper)={f_upper:.6e}"
            )

        while self.iterations < self.max_iter:
            self.iterations += 1
            mid = 0.5 * (lower + upper)
            f_mid = self._value(mid)
            logger.debug("Bisection iter %s: x=%s value=%s", self.iterations, mid, f_mid)
            if abs(f_mid) < self.tol_value:
                return RootResult(mid, self.iterations, True, self.mode.value, f_mid)
            if f_mid > 0.0:
                lower = mid
            else:
                upper = mid

        raise ConvergenceError(
            f"Bisection failed to converge within {self.max_iter} iterations; "
            f"final bracket [{lower:.12f}, {upper:.12f}]"
        )


def newton_with_bisect(
    func_and_deriv: FuncDeriv,
    initial_guess: float,
    *,
    tol_value: float = 1e-6,
    max_iter: int = 100,
    bracket: Tuple[float, float] = (-0.99, 10.0),
    domain_floor: float = -1.0,
) -> RootResult:
    """Solve f(x) = 0 starting with Newton and falling back to bisection."""
    solver = NewtonBisectSolver(
        func_and_deriv,
        tol_value=tol_value,
        max_iter=max_iter,
        bracket=bracket,
        domain_floor=domain_floor,
    )
    return solver.solve(initial_guess)
