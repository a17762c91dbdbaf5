"""Named slots of state and parameter vectors (name, unit, description)."""

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class SignalSpec:
    """Specification of one scalar entry of a state or parameter vector."""

    name: str
    unit: str = ""
    description: str = ""

    def label(self) -> str:
        """Axis label: 'name [unit]', or just the name if unitless."""
        if self.unit:
            return f"{self.name} [{self.unit}]"
        return self.name


def names(specs: Sequence[SignalSpec]) -> Tuple[str, ...]:
    """Ordered names of a spec sequence."""
    return tuple(s.name for s in specs)
