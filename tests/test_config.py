"""Tests for solver settings."""

import pytest

from ytmlib.bond import BondTerms
from ytmlib.config import DEFAULT_BOND_INPUTS, SolverSettings, load_solver_settings


def test_defaults():
    settings = SolverSettings()
    assert settings.tolerance == 1e-10
    assert settings.max_iterations == 100
    assert settings.bracket == (-0.99, 10.0)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("YTMLIB_SOLVER_TOLERANCE", "1e-8")
    monkeypatch.setenv("YTMLIB_SOLVER_MAX_ITER", "50")
    monkeypatch.setenv("YTMLIB_SOLVER_LOWER", "-0.5")
    monkeypatch.setenv("YTMLIB_SOLVER_UPPER", "2")
    settings = load_solver_settings()
    assert settings == SolverSettings(tolerance=1e-8, max_iterations=50, bracket=(-0.5, 2.0))


def test_load_without_env(monkeypatch):
    for name in ("TOLERANCE", "MAX_ITER", "LOWER", "UPPER"):
        monkeypatch.delenv(f"YTMLIB_SOLVER_{name}", raising=False)
    assert load_solver_settings() == SolverSettings()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tolerance": 0.0},
        {"max_iterations": 0},
        {"bracket": (-1.0, 1.0)},
        {"bracket": (0.5, 0.1)},
    ],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        SolverSettings(**kwargs)


def test_default_inputs_build_terms():
    terms = BondTerms.from_mapping(DEFAULT_BOND_INPUTS)
    assert terms.coupon_frequency == 12
    assert terms.market_price == 994.0
