"""
Compare explicit and implicit solvers on a preset experiment.

Runs every requested algorithm with the same tolerances, prints cost and
accuracy per algorithm, and optionally saves trajectory plots.

Usage:
    python examples/solver_comparison/run_solver_comparison.py --preset double_integrator_stiff
    python examples/solver_comparison/run_solver_comparison.py --preset tora_2dof --plot
"""

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from roboode.experiment import list_presets, preset
from roboode.io import load_experiment
from roboode.logging_config import setup_logging
from roboode.solvers import ALGORITHMS, ALIASES, DEFAULT_COMPARISON, compare_solvers

OUT_DIR = Path(__file__).resolve().parent / "output"


def main() -> None:
    parser = argparse.ArgumentParser(description="Solver comparison on toy robotics models")
    parser.add_argument("--preset", default="double_integrator", choices=list_presets())
    parser.add_argument("--config", type=Path, default=None, help="JSON experiment (overrides --preset)")
    parser.add_argument(
        "--algorithms",
        nargs="+",
        default=list(DEFAULT_COMPARISON),
        choices=list(ALGORITHMS) + list(ALIASES),
    )
    parser.add_argument("--rtol", type=float, default=1e-6)
    parser.add_argument("--atol", type=float, default=1e-8)
    parser.add_argument("--plot", action="store_true", help="Save state and comparison plots")
    parser.add_argument("--list-algorithms", action="store_true", help="Print available algorithms and exit")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.list_algorithms:
        for algo in ALGORITHMS.values():
            kind = "implicit" if algo.implicit else "explicit"
            print(f"{algo.name:<27} {algo.method:<7} {kind:<9} {algo.description}")
        for alias, target in ALIASES.items():
            print(f"{alias:<27} -> {target}")
        return

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    config = load_experiment(args.config) if args.config else preset(args.preset)
    print(f"Experiment: {config.name} ({config.model.name}), tspan={config.tspan}")
    print(f"  params: {config.model.params_to_mapping(config.params)}")
    print(f"  x0:     {dict(zip(config.model.state_names, config.initial_state.tolist()))}")
    print(f"  rtol={args.rtol:g}, atol={args.atol:g}\n")

    comparison = compare_solvers(config, args.algorithms, rtol=args.rtol, atol=args.atol)
    print(comparison.format_table())

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from roboode.simulation import plot_solver_comparison, plot_state_vs_time

        OUT_DIR.mkdir(parents=True, exist_ok=True)
        for i, name in enumerate(config.model.state_names):
            plot_solver_comparison(comparison, component=i)
            path = OUT_DIR / f"{config.name}_{name}.png"
            plt.savefig(path, dpi=120)
            plt.close()
            print(f"Saved {path}")
        fig = plot_state_vs_time(comparison.reference, model=config.model, title=f"{config.name} - reference")
        path = OUT_DIR / f"{config.name}_reference.png"
        fig.savefig(path, dpi=120)
        plt.close(fig)
        print(f"Saved {path}")


if __name__ == "__main__":
    main()
