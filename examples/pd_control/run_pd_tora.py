"""
Damping and PD control added to the TORA models without touching their equations.

1-DoF: free oscillation vs. extra viscous damping vs. PD regulation to a target angle.
2-DoF: PD on the first oscillator only; the second follows through the coupling spring.
"""

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from roboode.experiment import preset
from roboode.physics import ControlledModel, combine_controls, pd_controller, viscous_damping
from roboode.solvers import SolverRunner


def main() -> None:
    runner = SolverRunner("explicit-non-stiff", rtol=1e-8, atol=1e-10)

    cfg = preset("tora_1dof")
    base = cfg.model
    target = 0.5
    variants = {
        "free": base,
        "damped (b=1)": ControlledModel(base, viscous_damping(1.0, [1])),
        "PD (kp=20, kd=5)": ControlledModel(
            base, pd_controller(20.0, 5.0, [target], position_indices=[0], velocity_indices=[1])
        ),
    }
    print(f"TORA 1-DoF from theta0={cfg.initial_state[0]:.3f} rad, PD target {target} rad")
    for label, model in variants.items():
        traj = runner.solve(model, cfg.initial_state, cfg.tspan, cfg.params)
        theta, omega = traj.final_state
        energy = base.energy(traj.final_state, cfg.params)
        print(f"  {label:<18} theta(T)={theta:+.4f}  omega(T)={omega:+.2e}  E(T)={energy:.4f}  nfev={traj.nfev}")

    cfg2 = preset("tora_2dof")
    pd1 = pd_controller(20.0, 5.0, [target], position_indices=[0], velocity_indices=[2])
    controlled = ControlledModel(
        cfg2.model,
        combine_controls(lambda x, t: np.concatenate([pd1(x, t), [0.0]]), viscous_damping(0.2, [2, 3])),
    )
    traj = runner.solve(controlled, cfg2.initial_state, cfg2.tspan, cfg2.params)
    theta1, theta2 = traj.final_state[:2]
    print(f"\nTORA 2-DoF with PD on oscillator 1: theta1(T)={theta1:+.4f}, theta2(T)={theta2:+.4f}")


if __name__ == "__main__":
    main()
