"""Tests for the Newton/bisection state machine."""

import pytest

from ytmlib.utils.rootfinding import (
    BracketError,
    ConvergenceError,
    NewtonBisectSolver,
    RootFindingError,
    SolverMode,
    newton_with_bisect,
)


def linear(x):
    return 0.3 - x, -1.0


def flat_derivative(x):
    return 0.3 - x, 0.0


def misleading_derivative(x):
    return 0.3 - x, -0.01


class TestNewtonMode:
    def test_converges_on_linear_function(self):
        result = NewtonBisectSolver(linear, tol_value=1e-12).solve(0.0)
        assert result.converged
        assert result.method == "newton"
        assert result.root == pytest.approx(0.3, abs=1e-12)
        assert result.iterations == 2

    def test_stays_in_newton_mode(self):
        solver = NewtonBisectSolver(linear)
        solver.solve(0.0)
        assert solver.mode is SolverMode.NEWTON

    def test_iteration_cap(self):
        with pytest.raises(ConvergenceError):
            NewtonBisectSolver(linear, tol_value=1e-12, max_iter=1).solve(0.0)


class TestBisectionMode:
    def test_converges_when_started_in_bisection(self):
        solver = NewtonBisectSolver(linear, tol_value=1e-9, bracket=(0.0, 1.0))
        result = solver.solve(0.0, mode=SolverMode.BISECTION)
        assert result.method == "bisection"
        assert result.root == pytest.approx(0.3, abs=1e-8)
        assert abs(result.value) < 1e-9

    def test_bracket_must_straddle_root(self):
        solver = NewtonBisectSolver(linear, bracket=(0.5, 1.0))
        with pytest.raises(BracketError):
            solver.solve(0.0, mode=SolverMode.BISECTION)

    def test_bracket_sign_order_matters(self):
        def increasing(x):
            return x - 0.3, 1.0

        solver = NewtonBisectSolver(increasing, bracket=(0.0, 1.0))
        with pytest.raises(BracketError):
            solver.solve(0.0, mode=SolverMode.BISECTION)

    def test_iteration_cap(self):
        solver = NewtonBisectSolver(linear, tol_value=1e-12, max_iter=3, bracket=(0.0, 1.0))
        with pytest.raises(ConvergenceError):
            solver.solve(0.0, mode=SolverMode.BISECTION)


class TestFallback:
    def test_zero_derivative_switches_to_bisection(self):
        solver = NewtonBisectSolver(flat_derivative, tol_value=1e-9, bracket=(0.0, 1.0))
        result = solver.solve(0.0)
        assert solver.mode is SolverMode.BISECTION
        assert result.method == "bisection"
        assert result.root == pytest.approx(0.3, abs=1e-8)

    def test_step_out_of_domain_switches_to_bisection(self):
        # from 0.9 the step is -60, far below the floor at -1
        solver = NewtonBisectSolver(misleading_derivative, tol_value=1e-9, bracket=(-0.5, 1.0))
        result = solver.solve(0.9)
        assert result.method == "bisection"
        assert result.root == pytest.approx(0.3, abs=1e-8)

    def test_guess_outside_domain_switches_to_bisection(self):
        solver = NewtonBisectSolver(linear, tol_value=1e-9, bracket=(0.0, 1.0))
        result = solver.solve(-2.0)
        assert result.method == "bisection"

    def test_iterations_are_shared(self):
        solver = NewtonBisectSolver(flat_derivative, tol_value=1e-12, max_iter=5, bracket=(0.0, 1.0))
        with pytest.raises(ConvergenceError):
            solver.solve(0.0)
        assert solver.iterations == 5


def test_errors_share_base_class():
    assert issubclass(BracketError, RootFindingError)
    assert issubclass(ConvergenceError, RootFindingError)


def test_functional_wrapper():
    result = newton_with_bisect(linear, 0.0, tol_value=1e-12)
    assert result.root == pytest.approx(0.3)
