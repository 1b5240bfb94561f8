"""Mutable parameter record consumed by the galaxy generator."""

import dataclasses
from typing import Any, Dict, Tuple, Union

from ..config import (
    COUNT,
    SIZE,
    RADIUS,
    BRANCHES,
    SPIN,
    RANDOMNESS,
    RANDOMNESS_POWER,
    INSIDE_COLOR,
    OUTSIDE_COLOR,
)

# Anything vispy.color.Color accepts: hex string, color name, RGB(A) tuple
ColorSpec = Union[str, Tuple[float, ...]]


@dataclasses.dataclass
class GalaxyParameters:
    """
    Current galaxy configuration.

    Values are stored exactly as set. Range checking is the job of whatever
    edits the parameters (see controls.panel), and setting a value never
    regenerates anything by itself.
    """

    count: int = COUNT
    size: float = SIZE
    radius: float = RADIUS
    branches: int = BRANCHES
    spin: float = SPIN
    randomness: float = RANDOMNESS
    randomness_power: float = RANDOMNESS_POWER
    inside_color: ColorSpec = INSIDE_COLOR
    outside_color: ColorSpec = OUTSIDE_COLOR

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def get(self, name: str) -> Any:
        """Return the value of a named field."""
        if name not in self.field_names():
            raise KeyError(f"Unknown galaxy parameter: {name}")
        return getattr(self, name)

    def set(self, name: str, value: Any) -> None:
        """Set a named field, passing the value through unchanged."""
        if name not in self.field_names():
            raise KeyError(f"Unknown galaxy parameter: {name}")
        setattr(self, name, value)

    def snapshot(self) -> "GalaxyParameters":
        """Independent copy, safe to hold while the original keeps changing."""
        return dataclasses.replace(self)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "GalaxyParameters":
        """Build parameters from a mapping; missing fields keep their defaults."""
        params = cls()
        for name, value in values.items():
            params.set(name, value)
        return params
