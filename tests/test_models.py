"""Tests for the dynamics models (pure functions and DynamicsModel classes)."""

import numpy as np
import pytest

from roboode.physics import (
    DoubleIntegrator,
    DynamicsModel,
    Tora1DoF,
    Tora2DoF,
    double_integrator,
    get_model,
    tora_1dof,
    tora_2dof,
)


def test_double_integrator_known_value() -> None:
    dx = double_integrator(np.array([1.0, 0.0]), np.array([2.0, 0.5]), 0.0)
    np.testing.assert_allclose(dx, [0.0, -2.0])


@pytest.mark.parametrize("pos, vel", [(0.0, 0.0), (1.5, -3.0), (-1e6, 7.25), (3.3, 1e-12)])
def test_double_integrator_first_row_is_velocity(pos: float, vel: float) -> None:
    dx = double_integrator(np.array([pos, vel]), np.array([2.0, 0.5]), 1.0)
    assert dx[0] == vel


def test_tora_1dof_equilibrium_at_zero() -> None:
    dx = tora_1dof(np.array([0.0, 0.0]), np.array([0.1, 3.0, 0.0]), 0.0)
    np.testing.assert_allclose(dx, [0.0, 0.0])


def test_tora_1dof_matches_closed_form() -> None:
    rng = np.random.default_rng(0)
    for _ in range(50):
        theta, omega, d, c, u = rng.uniform(-5.0, 5.0, size=5)
        dx = tora_1dof(np.array([theta, omega]), np.array([d, c, u]), 0.0)
        assert dx[0] == omega
        assert dx[1] == pytest.approx(-d * omega - c * np.sin(theta) + u)


@pytest.mark.parametrize("k", [0.0, 1.0, 1e3, 1e9])
def test_tora_2dof_coupling_vanishes_without_offset(k: float) -> None:
    theta, omega1, omega2 = 0.7, 0.2, -0.4
    x = np.array([theta, theta, omega1, omega2])
    p = np.array([0.1, 3.0, 0.2, 2.0, k, 0.0, 0.0])
    dx = tora_2dof(x, p, 0.0)
    np.testing.assert_allclose(dx[:2], [omega1, omega2])
    assert dx[2] == pytest.approx(-0.1 * omega1 - 3.0 * np.sin(theta))
    assert dx[3] == pytest.approx(-0.2 * omega2 - 2.0 * np.sin(theta))


def test_tora_2dof_coupling_is_antisymmetric() -> None:
    """Spring term pushes the two oscillators towards each other with equal force."""
    x = np.array([0.0, 0.5, 0.0, 0.0])
    p = np.array([0.0, 0.0, 0.0, 0.0, 2.0, 0.0, 0.0])
    dx = tora_2dof(x, p, 0.0)
    np.testing.assert_allclose(dx[2:], [1.0, -1.0])


def test_model_classes_delegate_to_pure_functions() -> None:
    x = np.array([0.3, -0.2])
    assert np.array_equal(DoubleIntegrator().rhs(x, np.array([2.0, 0.5]), 0.0), double_integrator(x, [2.0, 0.5], 0.0))
    assert np.array_equal(Tora1DoF()(0.0, x, [0.1, 3.0, 0.5]), tora_1dof(x, np.array([0.1, 3.0, 0.5]), 0.0))
    x4 = np.array([0.1, 0.2, 0.3, 0.4])
    p7 = np.array(Tora2DoF.default_params)
    assert np.array_equal(Tora2DoF().rhs(x4, p7, 0.0), tora_2dof(x4, p7, 0.0))


def test_rhs_does_not_mutate_inputs() -> None:
    x = np.array([1.0, 2.0, 3.0, 4.0])
    p = np.array(Tora2DoF.default_params)
    x_before, p_before = x.copy(), p.copy()
    out = Tora2DoF().rhs(x, p, 0.0)
    assert out is not x
    assert np.array_equal(x, x_before) and np.array_equal(p, p_before)


def test_layout_and_names() -> None:
    m = Tora2DoF()
    assert m.state_dim == 4
    assert m.param_dim == 7
    assert m.state_names == ("theta1", "theta2", "omega1", "omega2")
    assert m.param_names == ("d1", "c1", "d2", "c2", "k", "input1", "input2")
    assert len(m.default_params) == m.param_dim
    assert m.describe()["state"][0] == "theta1 [rad]"


def test_validate_state_rejects_wrong_length() -> None:
    with pytest.raises(ValueError, match="state must have length 2"):
        DoubleIntegrator().validate_state([1.0, 2.0, 3.0])
    with pytest.raises(ValueError, match="1D"):
        DoubleIntegrator().validate_state(np.zeros((2, 2)))


def test_validate_params_rejects_wrong_length() -> None:
    with pytest.raises(ValueError, match="params must have length 3"):
        Tora1DoF().validate_params([0.1, 3.0])


def test_params_from_mapping_fills_defaults() -> None:
    m = Tora1DoF()
    np.testing.assert_allclose(m.params_from_mapping({"input": 0.5}), [0.1, 3.0, 0.5])
    assert m.params_to_mapping([0.2, 1.0, 0.0]) == {"d": 0.2, "c": 1.0, "input": 0.0}
    with pytest.raises(ValueError, match="unknown parameters"):
        m.params_from_mapping({"mass": 1.0})


def test_energy_values() -> None:
    assert DoubleIntegrator().energy([1.0, 2.0], [2.0, 0.5]) == pytest.approx(0.5 * 4.0 + 0.5 * 2.0)
    assert Tora1DoF().energy([0.0, 0.0], [0.1, 3.0, 0.0]) == 0.0
    assert Tora1DoF().energy([np.pi, 0.0], [0.1, 3.0, 0.0]) == pytest.approx(6.0)
    e = Tora2DoF().energy([0.0, 1.0, 0.0, 0.0], [0.0, 0.0, 0.0, 0.0, 4.0, 0.0, 0.0])
    assert e == pytest.approx(2.0)


def test_base_model_is_abstract() -> None:
    with pytest.raises(NotImplementedError):
        DynamicsModel().rhs(np.zeros(1), np.zeros(0), 0.0)
    with pytest.raises(NotImplementedError):
        DynamicsModel().energy(np.zeros(1), np.zeros(0))


def test_get_model() -> None:
    assert isinstance(get_model("tora_1dof"), Tora1DoF)
    with pytest.raises(ValueError, match="Unknown model"):
        get_model("acrobot")
