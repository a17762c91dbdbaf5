"""JSON persistence of experiment configurations."""

from roboode.io.serializers import load_config, load_experiment, save_config, save_experiment

__all__ = ["save_config", "load_config", "save_experiment", "load_experiment"]
