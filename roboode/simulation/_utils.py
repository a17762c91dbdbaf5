"""
Visualization utilities: state vs time, phase portrait, solver comparison.

All functions accept either a Trajectory or raw arrays (time, state).
Matplotlib is imported lazily; if it is not installed, functions raise
ImportError.
"""

import numbers
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from roboode.core.trajectory import Trajectory
from roboode.physics.ode import DynamicsModel


def _pyplot() -> Any:
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plotting. Install with: pip install matplotlib")
    return plt


def _get_time_and_state(
    trajectory: Optional[Trajectory] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Resolve (time, state) from a trajectory or from raw arrays."""
    if trajectory is not None:
        return trajectory.t, trajectory.y
    if time is not None and state is not None:
        st = np.asarray(state, dtype=float)
        if st.ndim == 1:
            st = st.reshape(-1, 1)
        return np.asarray(time, dtype=float).ravel(), st
    raise ValueError("Provide either trajectory= or (time=, state=).")


def _labels(
    n_states: int,
    trajectory: Optional[Trajectory],
    model: Optional[DynamicsModel],
    state_names: Optional[Sequence[str]],
) -> List[str]:
    if state_names is not None:
        labels = list(state_names)
    elif model is not None:
        labels = [s.label() for s in model.state_spec]
    elif trajectory is not None:
        labels = list(trajectory.state_names)
    else:
        labels = []
    while len(labels) < n_states:
        labels.append(f"x{len(labels)}")
    return labels


def plot_state_vs_time(
    trajectory: Optional[Trajectory] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    state_names: Optional[Sequence[str]] = None,
    model: Optional[DynamicsModel] = None,
    ax: Optional[Any] = None,
    title: str = "State vs time",
    **kwargs: Any,
) -> Any:
    """
    Plot each state component vs time, one subplot per component
    (or all on ax if given).

    Args:
        trajectory: solver result; alternatively pass time and state arrays.
        state_names: labels; default from model.state_spec or the trajectory.
        model: used for labels with units.
        ax: matplotlib axes (if None, creates a new figure with subplots).
        title: figure title.
        **kwargs: passed to ax.plot().

    Returns:
        The new figure, or ax if one was given.
    """
    plt = _pyplot()
    t, st = _get_time_and_state(trajectory, time, state)
    n_states = st.shape[1]
    labels = _labels(n_states, trajectory, model, state_names)

    if ax is None:
        fig, axes = plt.subplots(n_states, 1, sharex=True, figsize=(8, max(2 * n_states, 4)))
        if n_states == 1:
            axes = [axes]
        fig_ref = fig
    else:
        fig_ref = ax.figure
        axes = [ax] * n_states
    for i in range(n_states):
        a = axes[i]
        a.plot(t, st[:, i], label=labels[i], **kwargs)
        a.set_ylabel(labels[i])
        a.legend(loc="upper right", fontsize=8)
        a.grid(True, alpha=0.3)
    axes[-1].set_xlabel("t [s]")
    if title:
        fig_ref.suptitle(title)
    if ax is None:
        fig_ref.tight_layout()
    return fig_ref if ax is None else ax


def plot_phase_portrait(
    trajectory: Optional[Trajectory] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    x_idx: int = 0,
    y_idx: int = 1,
    model: Optional[DynamicsModel] = None,
    ax: Optional[Any] = None,
    title: str = "Phase portrait",
    **kwargs: Any,
) -> Any:
    """
    Plot state[:, x_idx] vs state[:, y_idx].
    Default indices 0, 1 give position vs velocity for the 1-DoF models.

    Returns:
        matplotlib axes.
    """
    plt = _pyplot()
    _, st = _get_time_and_state(trajectory, time, state)
    for idx in (x_idx, y_idx):
        if not 0 <= idx < st.shape[1]:
            raise ValueError(f"state index {idx} out of range for {st.shape[1]} components")
    labels = _labels(st.shape[1], trajectory, model, None)
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    ax.plot(st[:, x_idx], st[:, y_idx], **kwargs)
    ax.plot(st[0, x_idx], st[0, y_idx], "o", color="k", markersize=4)
    ax.set_xlabel(labels[x_idx])
    ax.set_ylabel(labels[y_idx])
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax


def plot_solver_comparison(
    comparison: Any,
    component: Any = 0,
    ax: Optional[Any] = None,
    show_reference: bool = True,
    title: Optional[str] = None,
) -> Any:
    """
    Overlay one state component of every trajectory in a SolverComparison.

    Args:
        comparison: result of compare_solvers().
        component: state index or name.
        ax: matplotlib axes (if None, creates a new figure).
        show_reference: also draw the reference solution (dashed).
        title: default: '<experiment> - <component>'.

    Returns:
        matplotlib axes.
    """
    plt = _pyplot()
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(8, 4))
    name = component
    for algorithm, traj in comparison:
        if isinstance(component, numbers.Integral):
            name = traj.state_names[component]
        ax.plot(traj.t, traj.component(component), marker=".", markersize=3, label=f"{algorithm} ({traj.method})")
    if show_reference:
        ref = comparison.reference
        ax.plot(ref.t, ref.component(component), "k--", linewidth=1, label="reference")
    ax.set_xlabel("t [s]")
    ax.set_ylabel(str(name))
    ax.set_title(title or f"{comparison.config.name} - {name}")
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)
    return ax
