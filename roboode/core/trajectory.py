"""Result of one integration run: sampled times and states, plus solver stats."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple, Union

import numpy as np


def _readonly(a: np.ndarray) -> np.ndarray:
    out = np.array(a, dtype=float, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Sampled trajectory returned by the solver runner.

    t has shape (T,), y has shape (T, n) (time-major). Both arrays are
    read-only; the trajectory is owned by whoever requested the run.
    """

    t: np.ndarray
    y: np.ndarray
    algorithm: str = ""
    method: str = ""
    success: bool = True
    message: str = ""
    nfev: int = 0
    njev: int = 0
    nlu: int = 0
    wall_time: float = 0.0
    state_names: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        t = np.atleast_1d(np.asarray(self.t, dtype=float)).ravel()
        y = np.asarray(self.y, dtype=float)
        if y.ndim == 1:
            y = y.reshape(-1, 1)
        if y.shape[0] != t.shape[0]:
            raise ValueError(
                f"y must have one row per time point: got {y.shape[0]} rows for {t.shape[0]} times"
            )
        names = tuple(self.state_names) or tuple(f"x{i}" for i in range(y.shape[1]))
        if len(names) != y.shape[1]:
            raise ValueError(f"state_names has {len(names)} entries, state has {y.shape[1]}")
        # frozen dataclass: bypass __setattr__ for normalization
        object.__setattr__(self, "t", _readonly(t))
        object.__setattr__(self, "y", _readonly(y))
        object.__setattr__(self, "state_names", names)

    def __len__(self) -> int:
        return self.t.shape[0]

    @property
    def state_dim(self) -> int:
        return self.y.shape[1]

    @property
    def final_state(self) -> np.ndarray:
        """State at the last sampled time."""
        if len(self) == 0:
            raise ValueError(f"Trajectory from '{self.algorithm}' has no samples: {self.message}")
        return self.y[-1]

    def component(self, key: Union[int, str]) -> np.ndarray:
        """Time series of one state component, by index or by name."""
        if isinstance(key, str):
            if key not in self.state_names:
                raise ValueError(f"Unknown state component '{key}', have {list(self.state_names)}")
            key = self.state_names.index(key)
        return self.y[:, key]

    def raise_for_status(self) -> "Trajectory":
        """Raise RuntimeError if the solver reported failure; return self otherwise."""
        if not self.success:
            raise RuntimeError(f"Integration with '{self.algorithm}' failed: {self.message}")
        return self

    def to_dict(self) -> Dict[str, np.ndarray]:
        """Columns as a dictionary: 't' plus one entry per state name."""
        out = {"t": self.t}
        for i, name in enumerate(self.state_names):
            out[name] = self.y[:, i]
        return out

    def to_csv(self, path: Union[str, Path], delimiter: str = ",") -> None:
        """
        Export to CSV. Columns are t and the state components; one row per sample.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        header = delimiter.join(("t",) + self.state_names)
        rows = [
            delimiter.join(repr(float(v)) for v in (ti, *yi))
            for ti, yi in zip(self.t, self.y)
        ]
        path.write_text(header + "\n" + "\n".join(rows) + "\n", encoding="utf-8")
