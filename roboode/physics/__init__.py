"""
Dynamics models.

Hierarchy:
  - ode: base model (DynamicsModel), dx/dt = rhs(x, p, t)
  - library: double integrator and TORA models (pure functions + classes)
  - compose: additive control inputs (ControlledModel, PD, damping)
"""

from roboode.physics.ode import DynamicsModel

from roboode.physics.library import (
    MODEL_REGISTRY,
    DoubleIntegrator,
    Tora1DoF,
    Tora2DoF,
    double_integrator,
    get_model,
    tora_1dof,
    tora_2dof,
)

from roboode.physics.compose import (
    ControlledModel,
    combine_controls,
    pd_controller,
    viscous_damping,
)

__all__ = [
    # Base
    "DynamicsModel",
    # Library
    "double_integrator",
    "tora_1dof",
    "tora_2dof",
    "DoubleIntegrator",
    "Tora1DoF",
    "Tora2DoF",
    "MODEL_REGISTRY",
    "get_model",
    # Composition
    "ControlledModel",
    "pd_controller",
    "viscous_damping",
    "combine_controls",
]
