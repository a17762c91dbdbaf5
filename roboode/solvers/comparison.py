"""
Run one experiment with several algorithms and compare cost and accuracy.

Each run is independent; results do not depend on the order in which the
algorithms are listed.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from roboode.core.trajectory import Trajectory
from roboode.experiment.config import ExperimentConfig
from roboode.solvers.runner import SolverRunner, resolve_algorithm

logger = logging.getLogger(__name__)

DEFAULT_COMPARISON = (
    "explicit-non-stiff",
    "implicit-stiff-rosenbrock",
    "implicit-stiff-bdf",
)

REFERENCE_ALGORITHM = "explicit-high-order"
REFERENCE_TOL = 1e-10


@dataclass
class SolverStats:
    """Cost and accuracy figures for one algorithm."""

    algorithm: str
    method: str
    implicit: bool
    success: bool
    nfev: int
    njev: int
    nlu: int
    n_points: int
    wall_time: float
    final_error: float
    energy_drift: float


class SolverComparison:
    """Trajectories of the same experiment under several algorithms."""

    def __init__(
        self,
        config: ExperimentConfig,
        trajectories: "OrderedDict[str, Trajectory]",
        reference: Trajectory,
    ) -> None:
        self.config = config
        self.trajectories = trajectories
        self.reference = reference

    def __getitem__(self, algorithm: str) -> Trajectory:
        return self.trajectories[algorithm]

    def __iter__(self):
        return iter(self.trajectories.items())

    def __len__(self) -> int:
        return len(self.trajectories)

    def _energy(self, x: np.ndarray) -> float:
        try:
            return self.config.model.energy(x, self.config.params)
        except NotImplementedError:
            return float("nan")

    def summary(self) -> List[SolverStats]:
        """
        One SolverStats per algorithm. final_error is the max-norm distance of
        the last state from the reference; energy_drift is |E(end) - E(start)|.
        """
        stats = []
        for name, traj in self.trajectories.items():
            if len(traj) and len(self.reference):
                final_error = float(np.max(np.abs(traj.final_state - self.reference.final_state)))
            else:
                final_error = float("nan")
            if len(traj):
                drift = abs(self._energy(traj.final_state) - self._energy(traj.y[0]))
            else:
                drift = float("nan")
            stats.append(
                SolverStats(
                    algorithm=name,
                    method=traj.method,
                    implicit=resolve_algorithm(name).implicit,
                    success=traj.success,
                    nfev=traj.nfev,
                    njev=traj.njev,
                    nlu=traj.nlu,
                    n_points=len(traj),
                    wall_time=traj.wall_time,
                    final_error=final_error,
                    energy_drift=drift,
                )
            )
        return stats

    def format_table(self) -> str:
        """Plain-text table of summary() for console output."""
        header = f"{'algorithm':<27} {'method':<7} {'kind':<9} {'ok':<3} {'nfev':>7} {'njev':>5} {'nlu':>5} {'points':>7} {'time[s]':>9} {'final err':>10} {'dE':>10}"
        lines = [header, "-" * len(header)]
        for s in self.summary():
            lines.append(
                f"{s.algorithm:<27} {s.method:<7} {'implicit' if s.implicit else 'explicit':<9} {'y' if s.success else 'n':<3} "
                f"{s.nfev:>7d} {s.njev:>5d} {s.nlu:>5d} {s.n_points:>7d} "
                f"{s.wall_time:>9.4f} {s.final_error:>10.2e} {s.energy_drift:>10.2e}"
            )
        return "\n".join(lines)


def compare_solvers(
    config: ExperimentConfig,
    algorithms: Sequence[str] = DEFAULT_COMPARISON,
    rtol: float = 1e-6,
    atol: float = 1e-8,
    reference: Optional[Trajectory] = None,
) -> SolverComparison:
    """
    Integrate config once per algorithm with the same tolerances.

    Args:
        config: experiment to run.
        algorithms: algorithm names or aliases, run in the given order.
        rtol, atol: tolerances shared by all runs.
        reference: trajectory used for error estimates. Default: a DOP853
            run at tolerance 1e-10 on the config's sample grid.

    Returns:
        SolverComparison keyed by the names as given in algorithms.
    """
    if not algorithms:
        raise ValueError("algorithms must name at least one solver")
    runners: Dict[str, SolverRunner] = OrderedDict(
        (name, SolverRunner(name, rtol=rtol, atol=atol)) for name in algorithms
    )
    trajectories: "OrderedDict[str, Trajectory]" = OrderedDict()
    for name, runner in runners.items():
        trajectories[name] = runner.run(config)

    if reference is None:
        logger.debug("Computing reference solution with %s", REFERENCE_ALGORITHM)
        reference = SolverRunner(
            REFERENCE_ALGORITHM, rtol=REFERENCE_TOL, atol=REFERENCE_TOL
        ).run(config)
    return SolverComparison(config, trajectories, reference)
