"""Core: data model shared by models, solvers and plotting."""

from roboode.core.signals import SignalSpec
from roboode.core.trajectory import Trajectory

__all__ = ["SignalSpec", "Trajectory"]
