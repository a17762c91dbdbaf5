"""Tests for the Trajectory result type."""

import numpy as np
import pytest

from roboode.core import Trajectory


def make_trajectory(**kwargs) -> Trajectory:
    t = np.array([0.0, 0.5, 1.0])
    y = np.array([[1.0, 0.0], [0.5, -1.0], [0.0, -0.5]])
    return Trajectory(t=t, y=y, state_names=("position", "velocity"), **kwargs)


def test_shapes_and_accessors() -> None:
    traj = make_trajectory()
    assert len(traj) == 3
    assert traj.state_dim == 2
    np.testing.assert_array_equal(traj.final_state, [0.0, -0.5])
    np.testing.assert_array_equal(traj.component("velocity"), [0.0, -1.0, -0.5])
    np.testing.assert_array_equal(traj.component(0), [1.0, 0.5, 0.0])
    with pytest.raises(ValueError, match="Unknown state component"):
        traj.component("theta")


def test_arrays_are_read_only() -> None:
    traj = make_trajectory()
    with pytest.raises(ValueError):
        traj.y[0, 0] = 2.0
    with pytest.raises(ValueError):
        traj.t[0] = 1.0


def test_input_arrays_are_copied() -> None:
    y = np.array([[1.0], [2.0]])
    traj = Trajectory(t=[0.0, 1.0], y=y)
    y[0, 0] = 10.0
    assert traj.y[0, 0] == 1.0
    assert traj.state_names == ("x0",)


def test_mismatched_lengths() -> None:
    with pytest.raises(ValueError, match="one row per time point"):
        Trajectory(t=[0.0, 1.0], y=np.zeros((3, 2)))
    with pytest.raises(ValueError, match="state_names"):
        Trajectory(t=[0.0], y=np.zeros((1, 2)), state_names=("a",))


def test_raise_for_status() -> None:
    assert make_trajectory().raise_for_status().success
    with pytest.raises(RuntimeError, match="step size"):
        make_trajectory(success=False, message="Required step size is less than spacing").raise_for_status()


def test_to_dict_and_csv(tmp_path) -> None:
    traj = make_trajectory()
    data = traj.to_dict()
    assert list(data) == ["t", "position", "velocity"]
    path = tmp_path / "out" / "traj.csv"
    traj.to_csv(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "t,position,velocity"
    assert len(lines) == 4
    assert [float(v) for v in lines[2].split(",")] == [0.5, 0.5, -1.0]
