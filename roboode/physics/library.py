"""
Ready-made dynamics models.

Each model is available both as a pure function f(x, p, t) -> dx/dt and as a
DynamicsModel subclass carrying the state/parameter layout, default
parameters and an energy function.
"""

from typing import Any

import numpy as np

from roboode.core.signals import SignalSpec
from roboode.physics.ode import DynamicsModel


def double_integrator(x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
    """Damped double integrator: x = [pos, vel], p = [k, c]."""
    pos, vel = x[0], x[1]
    k, c = p[0], p[1]
    return np.array([vel, -k * pos - c * vel])


def tora_1dof(x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
    """Rotational oscillator: x = [theta, omega], p = [d, c, input]."""
    theta, omega = x[0], x[1]
    d, c, u = p[0], p[1], p[2]
    return np.array([omega, -d * omega - c * np.sin(theta) + u])


def tora_2dof(x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
    """
    Two rotational oscillators coupled by a linear spring.
    x = [theta1, theta2, omega1, omega2], p = [d1, c1, d2, c2, k, input1, input2].
    """
    theta1, theta2, omega1, omega2 = x[0], x[1], x[2], x[3]
    d1, c1, d2, c2, k, u1, u2 = p[0], p[1], p[2], p[3], p[4], p[5], p[6]
    coupling = k * (theta2 - theta1)
    return np.array([
        omega1,
        omega2,
        -d1 * omega1 - c1 * np.sin(theta1) + coupling + u1,
        -d2 * omega2 - c2 * np.sin(theta2) - coupling + u2,
    ])


class DoubleIntegrator(DynamicsModel):
    """
    Damped double integrator (mass-spring-damper with unit mass):
    d(pos)/dt = vel, d(vel)/dt = -k*pos - c*vel.
    Large k and c make the system stiff.
    """

    name = "double_integrator"
    state_spec = (
        SignalSpec("position", "m"),
        SignalSpec("velocity", "m/s"),
    )
    param_spec = (
        SignalSpec("k", "1/s^2", "stiffness"),
        SignalSpec("c", "1/s", "damping"),
    )
    default_params = (2.0, 0.5)

    def rhs(self, x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
        return double_integrator(x, p, t)

    def energy(self, x: Any, p: Any) -> float:
        x = np.asarray(x, dtype=float)
        k = float(np.asarray(p, dtype=float)[0])
        return float(0.5 * x[1] ** 2 + 0.5 * k * x[0] ** 2)


class Tora1DoF(DynamicsModel):
    """
    Pendulum-like rotational oscillator with optional external torque:
    d(theta)/dt = omega, d(omega)/dt = -d*omega - c*sin(theta) + input.
    """

    name = "tora_1dof"
    state_spec = (
        SignalSpec("theta", "rad"),
        SignalSpec("omega", "rad/s"),
    )
    param_spec = (
        SignalSpec("d", "1/s", "damping"),
        SignalSpec("c", "1/s^2", "restoring coefficient"),
        SignalSpec("input", "rad/s^2", "external torque"),
    )
    default_params = (0.1, 3.0, 0.0)

    def rhs(self, x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
        return tora_1dof(x, p, t)

    def energy(self, x: Any, p: Any) -> float:
        x = np.asarray(x, dtype=float)
        c = float(np.asarray(p, dtype=float)[1])
        return float(0.5 * x[1] ** 2 + c * (1.0 - np.cos(x[0])))


class Tora2DoF(DynamicsModel):
    """
    Two Tora1DoF oscillators coupled by a linear spring k*(theta2 - theta1).
    State [theta1, theta2, omega1, omega2]: angles first, then rates.
    """

    name = "tora_2dof"
    state_spec = (
        SignalSpec("theta1", "rad"),
        SignalSpec("theta2", "rad"),
        SignalSpec("omega1", "rad/s"),
        SignalSpec("omega2", "rad/s"),
    )
    param_spec = (
        SignalSpec("d1", "1/s", "damping of oscillator 1"),
        SignalSpec("c1", "1/s^2", "restoring coefficient of oscillator 1"),
        SignalSpec("d2", "1/s", "damping of oscillator 2"),
        SignalSpec("c2", "1/s^2", "restoring coefficient of oscillator 2"),
        SignalSpec("k", "1/s^2", "coupling stiffness"),
        SignalSpec("input1", "rad/s^2", "external torque on oscillator 1"),
        SignalSpec("input2", "rad/s^2", "external torque on oscillator 2"),
    )
    default_params = (0.1, 3.0, 0.1, 3.0, 1.0, 0.0, 0.0)

    def rhs(self, x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
        return tora_2dof(x, p, t)

    def energy(self, x: Any, p: Any) -> float:
        x = np.asarray(x, dtype=float)
        p = np.asarray(p, dtype=float)
        theta1, theta2, omega1, omega2 = x
        c1, c2, k = p[1], p[3], p[4]
        kinetic = 0.5 * (omega1 ** 2 + omega2 ** 2)
        potential = c1 * (1.0 - np.cos(theta1)) + c2 * (1.0 - np.cos(theta2))
        return float(kinetic + potential + 0.5 * k * (theta2 - theta1) ** 2)


MODEL_REGISTRY = {
    cls.name: cls for cls in (DoubleIntegrator, Tora1DoF, Tora2DoF)
}


def get_model(name: str) -> DynamicsModel:
    """Instantiate a library model by name."""
    if name not in MODEL_REGISTRY:
        raise ValueError(f"Unknown model '{name}'. Choose from: {sorted(MODEL_REGISTRY)}")
    return MODEL_REGISTRY[name]()
