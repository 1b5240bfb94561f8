"""Keyboard parameter panel with settle-based regeneration."""

import time
from typing import Callable, Dict, Optional, Tuple

from ..config import PARAMETER_BOUNDS, SETTLE_DELAY
from ..state.parameters import GalaxyParameters

INTEGER_PARAMETERS = ("count", "branches")


class SettleTrigger:
    """
    Fires once after edits stop for a given delay.

    Every touch() re-arms the trigger, so a burst of edits produces a single
    firing, delay seconds after the last one.
    """

    def __init__(
        self,
        delay: float = SETTLE_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.delay = delay
        self.clock = clock
        self._last_edit: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._last_edit is not None

    def touch(self):
        """Record an edit."""
        self._last_edit = self.clock()

    def cancel(self):
        self._last_edit = None

    def poll(self) -> bool:
        """Return True exactly once when the edits have settled."""
        if self._last_edit is None:
            return False
        if self.clock() - self._last_edit < self.delay:
            return False
        self._last_edit = None
        return True


class ParameterPanel:
    """Selects and adjusts galaxy parameters within their bounds."""

    def __init__(
        self,
        params: GalaxyParameters,
        bounds: Optional[Dict[str, Tuple[float, float, float]]] = None,
        trigger: Optional[SettleTrigger] = None,
    ):
        """
        Initialize the panel.

        Args:
            params: Parameters edited in place
            bounds: name -> (min, max, step); defaults to config.PARAMETER_BOUNDS
            trigger: Settle trigger re-armed on each edit
        """
        self.params = params
        self.bounds = dict(PARAMETER_BOUNDS if bounds is None else bounds)
        self.trigger = trigger if trigger is not None else SettleTrigger()
        self.names = tuple(self.bounds)
        self._selected = 0

    @property
    def selected(self) -> str:
        """Name of the parameter the arrow keys adjust."""
        return self.names[self._selected]

    def select_next(self) -> str:
        self._selected = (self._selected + 1) % len(self.names)
        return self.selected

    def select_previous(self) -> str:
        self._selected = (self._selected - 1) % len(self.names)
        return self.selected

    def clamp(self, name: str, value):
        """Clamp a value to the bounds of a parameter."""
        low, high, _ = self.bounds[name]
        value = max(low, min(high, value))
        if name in INTEGER_PARAMETERS:
            return int(round(value))
        # Round away float drift from repeated steps
        return round(float(value), 6)

    def set_value(self, name: str, value):
        """Clamp and store a value, then re-arm the settle trigger."""
        value = self.clamp(name, value)
        if value != self.params.get(name):
            self.params.set(name, value)
            self.trigger.touch()
        return value

    def step(self, steps: int = 1):
        """Move the selected parameter by a number of steps."""
        name = self.selected
        _, _, step = self.bounds[name]
        return self.set_value(name, self.params.get(name) + steps * step)

    def increase(self):
        return self.step(1)

    def decrease(self):
        return self.step(-1)

    def reset(self):
        """Restore every parameter to its default."""
        defaults = GalaxyParameters()
        for name in GalaxyParameters.field_names():
            self.params.set(name, defaults.get(name))
        self.trigger.touch()

    def settled(self) -> bool:
        """True once after an edit burst, when regeneration should run."""
        return self.trigger.poll()

    def describe(self) -> str:
        """One-line summary of the selected parameter."""
        name = self.selected
        value = self.params.get(name)
        low, high, _ = self.bounds[name]
        if name in INTEGER_PARAMETERS:
            return f"{name}: {value}  [{low} .. {high}]"
        return f"{name}: {value:.3f}  [{low:g} .. {high:g}]"
