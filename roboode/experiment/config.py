"""Experiment configuration: model, initial state, time span and parameters."""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from roboode.physics.library import MODEL_REGISTRY, get_model
from roboode.physics.ode import DynamicsModel

ArrayLike = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True, eq=False)
class ExperimentConfig:
    """
    Everything one integration run needs besides the solver choice.

    initial_state and params are validated against the model layout on
    construction; tspan must satisfy start < end. Instances are never
    mutated: use with_params() / with_initial_state() for variants.
    """

    model: DynamicsModel
    initial_state: np.ndarray
    tspan: Tuple[float, float]
    params: np.ndarray
    name: str = ""
    n_samples: Optional[int] = None
    description: str = ""

    def __post_init__(self) -> None:
        x0 = self.model.validate_state(self.initial_state)
        p = self.model.validate_params(self.params)
        if len(self.tspan) != 2:
            raise ValueError(f"tspan must be a pair (start, end), got {self.tspan!r}")
        t0, t1 = float(self.tspan[0]), float(self.tspan[1])
        if not t0 < t1:
            raise ValueError(f"tspan must satisfy start < end, got ({t0}, {t1})")
        if self.n_samples is not None and self.n_samples < 2:
            raise ValueError(f"n_samples must be at least 2, got {self.n_samples}")
        object.__setattr__(self, "initial_state", x0)
        object.__setattr__(self, "params", p)
        object.__setattr__(self, "tspan", (t0, t1))
        object.__setattr__(self, "name", self.name or self.model.name)

    @property
    def t_eval(self) -> Optional[np.ndarray]:
        """Uniform sample grid over tspan, or None to keep the solver's own steps."""
        if self.n_samples is None:
            return None
        return np.linspace(self.tspan[0], self.tspan[1], self.n_samples)

    def with_params(self, **named: float) -> "ExperimentConfig":
        """Copy with some parameters replaced by name."""
        current = self.model.params_to_mapping(self.params)
        current.update(named)
        return replace(self, params=self.model.params_from_mapping(current))

    def with_initial_state(self, x0: ArrayLike) -> "ExperimentConfig":
        return replace(self, initial_state=np.asarray(x0, dtype=float))

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain-data form (JSON friendly); parameters are stored by name.
        Only library models can be stored: control laws are not serializable.
        """
        if MODEL_REGISTRY.get(self.model.name) is not type(self.model):
            raise ValueError(
                f"Model '{self.model.name}' cannot be serialized: only {sorted(MODEL_REGISTRY)} "
                "are supported, control laws are not serializable"
            )
        return {
            "name": self.name,
            "model": self.model.name,
            "initial_state": self.initial_state.tolist(),
            "tspan": list(self.tspan),
            "params": self.model.params_to_mapping(self.params),
            "n_samples": self.n_samples,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperimentConfig":
        """Inverse of to_dict(). params may be a mapping or an ordered list."""
        if data.get("model") not in MODEL_REGISTRY:
            raise ValueError(
                f"Unknown model {data.get('model')!r}. Choose from: {sorted(MODEL_REGISTRY)}"
            )
        model = get_model(data["model"])
        params = data.get("params", {})
        if isinstance(params, dict):
            params = model.params_from_mapping(params)
        return cls(
            model=model,
            initial_state=np.asarray(data["initial_state"], dtype=float),
            tspan=tuple(data["tspan"]),
            params=np.asarray(params, dtype=float),
            name=data.get("name", ""),
            n_samples=data.get("n_samples"),
            description=data.get("description", ""),
        )


def _double_integrator() -> ExperimentConfig:
    model = get_model("double_integrator")
    return ExperimentConfig(
        model=model,
        initial_state=np.array([1.0, 0.0]),
        tspan=(0.0, 10.0),
        params=model.params_from_mapping({"k": 2.0, "c": 0.5}),
        name="double_integrator",
        description="Lightly damped oscillator, non-stiff.",
    )


def _double_integrator_stiff() -> ExperimentConfig:
    # eigenvalues -1 and -1000
    model = get_model("double_integrator")
    return ExperimentConfig(
        model=model,
        initial_state=np.array([1.0, 0.0]),
        tspan=(0.0, 10.0),
        params=model.params_from_mapping({"k": 1000.0, "c": 1001.0}),
        name="double_integrator_stiff",
        description="Overdamped oscillator with widely separated time scales.",
    )


def _tora_1dof() -> ExperimentConfig:
    model = get_model("tora_1dof")
    return ExperimentConfig(
        model=model,
        initial_state=np.array([np.pi / 4, 0.0]),
        tspan=(0.0, 20.0),
        params=model.params_from_mapping({"d": 0.1, "c": 3.0, "input": 0.0}),
        name="tora_1dof",
        description="Free oscillation of the rotational oscillator.",
    )


def _tora_2dof() -> ExperimentConfig:
    model = get_model("tora_2dof")
    return ExperimentConfig(
        model=model,
        initial_state=np.array([np.pi / 4, 0.0, 0.0, 0.0]),
        tspan=(0.0, 20.0),
        params=model.params_from_mapping(
            {"d1": 0.1, "c1": 3.0, "d2": 0.1, "c2": 3.0, "k": 1.0, "input1": 0.0, "input2": 0.0}
        ),
        name="tora_2dof",
        description="Two coupled oscillators, energy exchanged through the spring.",
    )


_PRESETS: Dict[str, Callable[[], ExperimentConfig]] = {
    "double_integrator": _double_integrator,
    "double_integrator_stiff": _double_integrator_stiff,
    "tora_1dof": _tora_1dof,
    "tora_2dof": _tora_2dof,
}


def list_presets() -> List[str]:
    return list(_PRESETS)


def preset(name: str) -> ExperimentConfig:
    """Built-in experiment configuration by name."""
    if name not in _PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Choose from: {list_presets()}")
    return _PRESETS[name]()
