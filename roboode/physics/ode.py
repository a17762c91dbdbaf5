"""Base class for dynamics models: dx/dt = f(x, p, t)."""

from typing import Any, Dict, Mapping, Sequence, Tuple, Union

import numpy as np

from roboode.core.signals import SignalSpec, names

ArrayLike = Union[Sequence[float], np.ndarray]


def _ensure_1d(a: ArrayLike, name: str) -> np.ndarray:
    out = np.atleast_1d(np.asarray(a, dtype=float))
    if out.ndim != 1:
        raise ValueError(f"{name} must be 1D, got shape {out.shape}")
    return out


class DynamicsModel:
    """
    Base class for models described by an ODE with a parameter vector:
    dx/dt = rhs(x, p, t).

    Subclasses declare the layout of the state and parameter vectors with
    state_spec / param_spec and implement rhs(). Models hold no run state:
    the same instance can be integrated any number of times with different
    parameters.
    """

    name: str = "model"
    state_spec: Tuple[SignalSpec, ...] = ()
    param_spec: Tuple[SignalSpec, ...] = ()
    default_params: Tuple[float, ...] = ()

    def rhs(self, x: np.ndarray, p: np.ndarray, t: float) -> np.ndarray:
        """
        Right-hand side of the ODE: dx/dt = rhs(x, p, t).
        Must be implemented by subclasses.
        """
        raise NotImplementedError("Subclasses must implement rhs(x, p, t).")

    def __call__(self, t: float, x: ArrayLike, p: ArrayLike) -> np.ndarray:
        """Solver argument order: f(t, x, p)."""
        return self.rhs(np.asarray(x, dtype=float), np.asarray(p, dtype=float), t)

    def energy(self, x: ArrayLike, p: ArrayLike) -> float:
        """Mechanical energy of state x; override in subclasses."""
        raise NotImplementedError(f"{type(self).__name__} does not define an energy function.")

    @property
    def state_dim(self) -> int:
        return len(self.state_spec)

    @property
    def param_dim(self) -> int:
        return len(self.param_spec)

    @property
    def state_names(self) -> Tuple[str, ...]:
        return names(self.state_spec)

    @property
    def param_names(self) -> Tuple[str, ...]:
        return names(self.param_spec)

    def validate_state(self, x: ArrayLike) -> np.ndarray:
        """Return x as a float array, checking its length against state_spec."""
        x = _ensure_1d(x, "state")
        if x.size != self.state_dim:
            raise ValueError(
                f"{self.name}: state must have length {self.state_dim} "
                f"{list(self.state_names)}, got {x.size}"
            )
        return x

    def validate_params(self, p: ArrayLike) -> np.ndarray:
        """Return p as a float array, checking its length against param_spec."""
        p = _ensure_1d(p, "params")
        if p.size != self.param_dim:
            raise ValueError(
                f"{self.name}: params must have length {self.param_dim} "
                f"{list(self.param_names)}, got {p.size}"
            )
        return p

    def params_from_mapping(self, mapping: Mapping[str, float]) -> np.ndarray:
        """
        Build the parameter vector from named values, in declared order.
        Missing names take their default value.
        """
        unknown = set(mapping) - set(self.param_names)
        if unknown:
            raise ValueError(
                f"{self.name}: unknown parameters {sorted(unknown)}, "
                f"expected a subset of {list(self.param_names)}"
            )
        return np.array(
            [float(mapping.get(n, d)) for n, d in zip(self.param_names, self.default_params)]
        )

    def params_to_mapping(self, p: ArrayLike) -> Dict[str, float]:
        p = self.validate_params(p)
        return dict(zip(self.param_names, (float(v) for v in p)))

    def describe(self) -> Dict[str, Any]:
        """Summary of the model layout (name, state and parameter labels)."""
        return {
            "name": self.name,
            "state": [s.label() for s in self.state_spec],
            "params": [s.label() for s in self.param_spec],
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={list(self.state_names)}, params={list(self.param_names)})"
