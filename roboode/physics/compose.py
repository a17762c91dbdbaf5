"""
Control composition: a base dynamics model plus additive control inputs.

Allows adding damping or feedback control to a model without rewriting its
equations: ControlledModel wraps the base rhs and adds the output of a
control function to selected derivative rows.
"""

from typing import Callable, Optional, Sequence

import numpy as np

from roboode.physics.ode import DynamicsModel, _ensure_1d

# Control law: (x, t) -> additive input for the controlled rows
ControlFn = Callable[[np.ndarray, float], np.ndarray]


def _velocity_rows(state_dim: int) -> tuple:
    """Second half of a [positions..., velocities...] state."""
    half = state_dim // 2
    return tuple(range(half, state_dim))


class ControlledModel(DynamicsModel):
    """
    Base model with an additive control input:
    dx/dt = base.rhs(x, p, t) + B * control_fn(x, t),
    where B selects the rows listed in input_indices.

    The state and parameter layout are those of the base model.
    """

    def __init__(
        self,
        base: DynamicsModel,
        control_fn: ControlFn,
        input_indices: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Args:
            base: model whose rhs is extended.
            control_fn: (x, t) -> input vector, one entry per controlled row.
            input_indices: derivative rows receiving the input.
                Default: the velocity half of the state (acceleration rows).
        """
        self.base = base
        self.control_fn = control_fn
        if input_indices is None:
            input_indices = _velocity_rows(base.state_dim)
        self.input_indices = tuple(int(i) for i in input_indices)
        for i in self.input_indices:
            if not 0 <= i < base.state_dim:
                raise ValueError(f"input index {i} out of range for state of length {base.state_dim}")
        self.name = f"{base.name}+control"
        self.state_spec = base.state_spec
        self.param_spec = base.param_spec
        self.default_params = base.default_params

    def control(self, x: np.ndarray, t: float) -> np.ndarray:
        """Evaluate the control law and check its length."""
        u = _ensure_1d(self.control_fn(x, t), "control")
        if u.size != len(self.input_indices):
            raise ValueError(
                f"control_fn returned {u.size} values, expected {len(self.input_indices)}"
            )
        return u

    def rhs(self, x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
        dx = np.array(self.base.rhs(x, p, t), dtype=float)
        dx[list(self.input_indices)] += self.control(x, t)
        return dx

    def energy(self, x, p) -> float:
        return self.base.energy(x, p)


def pd_controller(
    kp: float,
    kd: float,
    target: Sequence[float],
    position_indices: Sequence[int],
    velocity_indices: Sequence[int],
) -> ControlFn:
    """
    PD law u = kp * (target - q) - kd * dq, with q = x[position_indices]
    and dq = x[velocity_indices].
    """
    target = _ensure_1d(target, "target")
    pos = list(position_indices)
    vel = list(velocity_indices)
    if not (len(pos) == len(vel) == target.size):
        raise ValueError("target, position_indices and velocity_indices must have the same length")

    def control(x: np.ndarray, t: float) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return kp * (target - x[pos]) - kd * x[vel]

    return control


def viscous_damping(b: float, velocity_indices: Sequence[int]) -> ControlFn:
    """Extra viscous friction u = -b * dq."""
    vel = list(velocity_indices)

    def control(x: np.ndarray, t: float) -> np.ndarray:
        return -b * np.asarray(x, dtype=float)[vel]

    return control


def combine_controls(*fns: ControlFn) -> ControlFn:
    """Sum of several control laws acting on the same rows."""
    if not fns:
        raise ValueError("combine_controls needs at least one control function")

    def control(x: np.ndarray, t: float) -> np.ndarray:
        total = _ensure_1d(fns[0](x, t), "control")
        for fn in fns[1:]:
            total = total + _ensure_1d(fn(x, t), "control")
        return total

    return control
