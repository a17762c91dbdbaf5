"""Tests for SolverRunner (scipy solve_ivp backend)."""

import logging

import numpy as np
import pytest

from roboode.core import SignalSpec
from roboode.experiment import ExperimentConfig, preset
from roboode.physics import DoubleIntegrator, DynamicsModel
from roboode.solvers import ALGORITHMS, ALIASES, SolverRunner, resolve_algorithm, solve


class BlowUp(DynamicsModel):
    """dx/dt = x^2: finite-time blow-up at t = 1/x0."""

    name = "blow_up"
    state_spec = (SignalSpec("x"),)
    param_spec = ()
    default_params = ()

    def rhs(self, x, p, t):
        return x ** 2


class Broken(DynamicsModel):
    name = "broken"
    state_spec = (SignalSpec("x"),)

    def rhs(self, x, p, t):
        raise ArithmeticError("rhs failed")


def damped_solution(t: np.ndarray, k: float = 2.0, c: float = 0.5) -> np.ndarray:
    """Position of the underdamped oscillator from x0 = 1, v0 = 0."""
    sigma = c / 2.0
    wd = np.sqrt(k - sigma ** 2)
    return np.exp(-sigma * t) * (np.cos(wd * t) + sigma / wd * np.sin(wd * t))


def test_damped_oscillation_decays() -> None:
    """Double integrator k=2, c=0.5 from [1, 0] over [0, 10] at tolerance 1e-8."""
    model = DoubleIntegrator()
    traj = SolverRunner("explicit-non-stiff", rtol=1e-8, atol=1e-8).solve(
        model, [1.0, 0.0], (0.0, 10.0), [2.0, 0.5]
    )
    assert traj.success
    position = traj.component("position")
    assert traj.t[0] == 0.0
    assert traj.t[-1] == pytest.approx(10.0)
    assert abs(position[-1]) < abs(position[0])
    # oscillates: changes sign at least once
    assert np.any(np.diff(np.sign(position)) != 0)


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_all_algorithms_match_analytic_solution(algorithm: str) -> None:
    cfg = ExperimentConfig(DoubleIntegrator(), [1.0, 0.0], (0.0, 10.0), [2.0, 0.5], n_samples=101)
    traj = SolverRunner(algorithm, rtol=1e-8, atol=1e-10).run(cfg)
    assert traj.success
    assert traj.algorithm == algorithm
    assert traj.method == ALGORITHMS[algorithm].method
    np.testing.assert_allclose(traj.t, cfg.t_eval)
    np.testing.assert_allclose(traj.component(0), damped_solution(cfg.t_eval), atol=1e-5)


def test_stiff_problem_implicit_is_cheaper() -> None:
    cfg = preset("double_integrator_stiff")
    explicit = SolverRunner("explicit-non-stiff", rtol=1e-6, atol=1e-8).run(cfg)
    implicit = SolverRunner("implicit-stiff-bdf", rtol=1e-6, atol=1e-8).run(cfg)
    assert explicit.success and implicit.success
    assert implicit.nfev < explicit.nfev
    assert implicit.nlu > 0
    # slow mode: x(t) ~ 1000/999 * exp(-t)
    expected = 1000.0 / 999.0 * np.exp(-10.0)
    assert implicit.final_state[0] == pytest.approx(expected, abs=1e-6)


def test_aliases_resolve_to_scipy_methods() -> None:
    assert SolverRunner("Tsit5").algorithm.method == "RK45"
    assert SolverRunner("Rosenbrock23").algorithm.method == "Radau"
    assert SolverRunner("CVODE_BDF").algorithm.method == "BDF"
    assert SolverRunner("AutoTsit5").algorithm.method == "LSODA"
    for alias, target in ALIASES.items():
        assert resolve_algorithm(alias) is ALGORITHMS[target]


def test_invalid_algorithm() -> None:
    with pytest.raises(ValueError, match="Invalid algorithm"):
        SolverRunner("Euler")


@pytest.mark.parametrize("rtol, atol", [(0.0, 1e-8), (1e-6, -1.0), (float("nan"), 1e-8), (1e-6, float("nan"))])
def test_invalid_tolerances(rtol: float, atol: float) -> None:
    with pytest.raises(ValueError, match="Tolerances must be positive"):
        SolverRunner(rtol=rtol, atol=atol)


def test_invalid_inputs_rejected_before_solving() -> None:
    runner = SolverRunner()
    with pytest.raises(ValueError, match="start < end"):
        runner.solve(DoubleIntegrator(), [1.0, 0.0], (1.0, 1.0), [2.0, 0.5])
    with pytest.raises(ValueError, match="state must have length 2"):
        runner.solve(DoubleIntegrator(), [1.0], (0.0, 1.0), [2.0, 0.5])


def test_solver_failure_is_returned_not_raised(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="roboode.solvers.runner"):
        with np.errstate(over="ignore", invalid="ignore"):
            traj = SolverRunner("explicit-non-stiff").solve(BlowUp(), [1.0], (0.0, 2.0), [])
    assert not traj.success
    assert traj.message
    assert traj.t[-1] < 2.0
    assert any("did not reach" in r.getMessage() for r in caplog.records)
    with pytest.raises(RuntimeError, match="failed"):
        traj.raise_for_status()


def test_model_exceptions_propagate() -> None:
    with pytest.raises(ArithmeticError, match="rhs failed"):
        SolverRunner().solve(Broken(), [1.0], (0.0, 1.0), [])


def test_runs_are_independent() -> None:
    cfg = preset("tora_1dof")
    runner = SolverRunner("implicit-stiff-rosenbrock")
    first = runner.run(cfg)
    runner.run(preset("tora_2dof"))
    again = runner.run(cfg)
    np.testing.assert_array_equal(first.t, again.t)
    np.testing.assert_array_equal(first.y, again.y)


def test_solve_shortcut() -> None:
    traj = solve(preset("tora_2dof"), algorithm="CVODE_BDF", rtol=1e-6, atol=1e-8)
    assert traj.success
    assert traj.state_names == ("theta1", "theta2", "omega1", "omega2")
    assert traj.y.shape == (len(traj), 4)
    assert traj.wall_time >= 0.0


def test_invalid_max_step() -> None:
    with pytest.raises(ValueError, match="max_step"):
        SolverRunner(max_step=float("nan"))
    with pytest.raises(ValueError, match="max_step"):
        SolverRunner(max_step=0.0)


def test_failure_before_first_sample_returns_empty_trajectory() -> None:
    """Blow-up at t=1 while the first requested sample is t=2."""
    with np.errstate(over="ignore", invalid="ignore"):
        traj = SolverRunner().solve(BlowUp(), [1.0], (0.0, 5.0), [], t_eval=[2.0, 5.0])
    assert not traj.success
    assert len(traj) == 0
    assert traj.y.shape == (0, 1)
    assert traj.state_names == ("x",)
    with pytest.raises(ValueError, match="no samples"):
        traj.final_state
    with pytest.raises(RuntimeError, match="failed"):
        traj.raise_for_status()


def test_algorithm_metadata() -> None:
    for algo in ALGORITHMS.values():
        assert algo.description
    assert ALGORITHMS["implicit-stiff-bdf"].implicit
    assert not ALGORITHMS["explicit-non-stiff"].implicit
