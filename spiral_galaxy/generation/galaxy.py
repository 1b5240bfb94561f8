"""Container for one generation's position and color buffers."""

import numpy as np
from typing import Callable, List, Optional

from ..errors import GalaxyDisposedError
from ..state.parameters import GalaxyParameters


class GeneratedGalaxy:
    """Flat position and color buffers produced by one call to the generator."""

    def __init__(
        self,
        positions: np.ndarray,
        colors: np.ndarray,
        parameters: GalaxyParameters,
    ):
        """
        Wrap freshly generated buffers.

        Args:
            positions: Flat float32 array (3 * count,) of x, y, z triples
            colors: Flat float32 array (3 * count,) of r, g, b triples
            parameters: Snapshot of the parameters the buffers were built from
        """
        if positions.shape != colors.shape:
            raise ValueError(
                f"Buffer shapes differ: positions {positions.shape}, "
                f"colors {colors.shape}"
            )
        self._positions: Optional[np.ndarray] = positions
        self._colors: Optional[np.ndarray] = colors
        self.parameters = parameters
        self.count = len(positions) // 3
        self._dispose_callbacks: List[Callable[["GeneratedGalaxy"], None]] = []

    @property
    def disposed(self) -> bool:
        return self._positions is None

    @property
    def positions(self) -> np.ndarray:
        """Particle positions, flat (3 * count,)."""
        if self._positions is None:
            raise GalaxyDisposedError("Galaxy buffers have been disposed")
        return self._positions

    @property
    def colors(self) -> np.ndarray:
        """Particle colors, flat (3 * count,)."""
        if self._colors is None:
            raise GalaxyDisposedError("Galaxy buffers have been disposed")
        return self._colors

    @property
    def positions_xyz(self) -> np.ndarray:
        """Positions as a (count, 3) view."""
        return self.positions.reshape(-1, 3)

    @property
    def colors_rgb(self) -> np.ndarray:
        """Colors as a (count, 3) view."""
        return self.colors.reshape(-1, 3)

    def add_dispose_callback(self, callback: Callable[["GeneratedGalaxy"], None]):
        """Register a callback fired once when this galaxy is disposed."""
        self._dispose_callbacks.append(callback)

    def dispose(self):
        """Release the buffers and notify callbacks. Safe to call twice."""
        if self.disposed:
            return
        self._positions = None
        self._colors = None
        callbacks = self._dispose_callbacks
        self._dispose_callbacks = []
        for callback in callbacks:
            callback(self)

    def __repr__(self) -> str:
        state = "disposed" if self.disposed else "live"
        return f"GeneratedGalaxy(count={self.count}, {state})"
