"""Save and load experiment configurations as JSON."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from roboode.experiment.config import ExperimentConfig

logger = logging.getLogger(__name__)


def _convert(d: Any) -> Any:
    """Convert numpy values to plain Python for JSON."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict) to JSON.
    Numpy arrays are converted to lists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(config), f, indent=2, ensure_ascii=False)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_experiment(config: ExperimentConfig, path: Union[str, Path]) -> None:
    """Write an ExperimentConfig to JSON (parameters stored by name)."""
    save_config(config.to_dict(), path)
    logger.info("Saved experiment '%s' to %s", config.name, path)


def load_experiment(path: Union[str, Path]) -> ExperimentConfig:
    """Read an ExperimentConfig written by save_experiment()."""
    config = ExperimentConfig.from_dict(load_config(path))
    logger.info("Loaded experiment '%s' from %s", config.name, path)
    return config
