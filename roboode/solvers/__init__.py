"""Solver runner over scipy.integrate.solve_ivp and solver comparison."""

from roboode.solvers.runner import (
    ALGORITHMS,
    ALIASES,
    Algorithm,
    SolverRunner,
    resolve_algorithm,
    solve,
)
from roboode.solvers.comparison import (
    DEFAULT_COMPARISON,
    SolverComparison,
    SolverStats,
    compare_solvers,
)

__all__ = [
    "Algorithm",
    "ALGORITHMS",
    "ALIASES",
    "resolve_algorithm",
    "SolverRunner",
    "solve",
    "DEFAULT_COMPARISON",
    "SolverComparison",
    "SolverStats",
    "compare_solvers",
]
