"""
Simulation output: plotting helpers for trajectories and solver comparisons.
"""

from roboode.simulation._utils import (
    plot_phase_portrait,
    plot_solver_comparison,
    plot_state_vs_time,
)

__all__ = [
    "plot_state_vs_time",
    "plot_phase_portrait",
    "plot_solver_comparison",
]
