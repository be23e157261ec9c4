"""Runtime settings for ytmlib.

Solver settings default to the values below and can be overridden through
environment variables:

- ``YTMLIB_SOLVER_TOLERANCE``: price tolerance relative to the market price
- ``YTMLIB_SOLVER_MAX_ITER``: iteration budget shared by Newton and bisection
- ``YTMLIB_SOLVER_LOWER`` / ``YTMLIB_SOLVER_UPPER``: bisection bracket on the
  periodic yield
"""

import os
from dataclasses import dataclass
from typing import Dict, Tuple

DAYS_PER_YEAR = 365.25

# Starting inputs of the calculator screen.
DEFAULT_BOND_INPUTS: Dict[str, object] = {
    "faceValue": 1000.0,
    "marketPrice": 994.0,
    "couponRate": 9.0,
    "couponFrequency": 12,
    "maturityDate": "2026-01-01",
    "tdsRate": 10.0,
}


@dataclass(frozen=True)
class SolverSettings:
    """Convergence settings for the yield solver.

    Attributes:
        tolerance: Stop once |PV(r) - price| falls below tolerance * max(1, price)
        max_iterations: Iteration cap across both solver modes
        bracket: (lower, upper) periodic-yield bracket for the bisection fallback
    """

    tolerance: float = 1e-10
    max_iterations: int = 100
    bracket: Tuple[float, float] = (-0.99, 10.0)

    def __post_init__(self) -> None:
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        lower, upper = self.bracket
        if lower <= -1.0:
            raise ValueError("bracket lower bound must be greater than -1")
        if upper <= lower:
            raise ValueError("bracket upper bound must exceed the lower bound")


def load_solver_settings() -> SolverSettings:
    """Build solver settings from defaults and ``YTMLIB_SOLVER_*`` env vars."""
    defaults = SolverSettings()
    return SolverSettings(
        tolerance=float(os.getenv("YTMLIB_SOLVER_TOLERANCE", defaults.tolerance)),
        max_iterations=int(os.getenv("YTMLIB_SOLVER_MAX_ITER", defaults.max_iterations)),
        bracket=(
            float(os.getenv("YTMLIB_SOLVER_LOWER", defaults.bracket[0])),
            float(os.getenv("YTMLIB_SOLVER_UPPER", defaults.bracket[1])),
        ),
    )
