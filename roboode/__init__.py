"""
roboode: ODE solvers applied to small robotics dynamics models.
"""

__version__ = "0.1.0"

from roboode.core.signals import SignalSpec
from roboode.core.trajectory import Trajectory
from roboode.experiment.config import ExperimentConfig, preset
from roboode.physics.ode import DynamicsModel
from roboode.solvers.runner import SolverRunner, solve

__all__ = [
    "__version__",
    "SignalSpec",
    "Trajectory",
    "DynamicsModel",
    "ExperimentConfig",
    "preset",
    "SolverRunner",
    "solve",
]
