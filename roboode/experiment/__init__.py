"""Experiment configurations and built-in presets."""

from roboode.experiment.config import ExperimentConfig, list_presets, preset

__all__ = ["ExperimentConfig", "preset", "list_presets"]
