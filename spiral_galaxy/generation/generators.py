"""Spiral galaxy point cloud generation."""

import numpy as np
from typing import Callable, Optional, Tuple

from ..errors import InvalidParameter
from ..state.parameters import GalaxyParameters
from ..visualization.colors import parse_color, mix_colors
from .galaxy import GeneratedGalaxy


def sample_radii(count: int, radius: float, rng) -> np.ndarray:
    """
    Draw each particle's orbit radius uniformly in [0, radius).

    Args:
        count: Number of particles
        radius: Maximum galaxy radius
        rng: Uniform random source with a random(size) method

    Returns:
        radii: Array of shape (count,)
    """
    return np.asarray(rng.random(count), dtype=np.float64) * radius


def compute_spin_angles(radii: np.ndarray, spin: float) -> np.ndarray:
    """Angular twist of each particle; farther particles twist more."""
    return radii * spin


def compute_branch_angles(count: int, branches: int) -> np.ndarray:
    """
    Assign particles to arms round robin by index.

    Particle i sits on arm (i mod branches), so arm populations differ by at
    most one regardless of the random draws.

    Args:
        count: Number of particles
        branches: Number of spiral arms

    Returns:
        branch_angles: Array of shape (count,) in [0, 2*pi)
    """
    indices = np.arange(count)
    return (indices % branches) / branches * 2.0 * np.pi


def sample_jitter(count: int, randomness_power: float, rng) -> np.ndarray:
    """
    Draw symmetric, power-shaped offsets for every particle and axis.

    Each offset is U ** randomness_power with a random sign (+1 when a
    second draw is below 0.5). Larger exponents push magnitudes toward zero,
    keeping particles closer to the arm.

    Args:
        count: Number of particles
        randomness_power: Exponent applied to the magnitude draw
        rng: Uniform random source with a random(size) method

    Returns:
        jitter: Array of shape (count, 3)
    """
    magnitudes = np.asarray(rng.random((count, 3)), dtype=np.float64)
    signs = np.where(np.asarray(rng.random((count, 3))) < 0.5, 1.0, -1.0)
    return magnitudes**randomness_power * signs


def compute_positions(
    radii: np.ndarray,
    spin_angles: np.ndarray,
    branch_angles: np.ndarray,
    jitter: np.ndarray,
) -> np.ndarray:
    """
    Place particles on their arms in the flat (x, z) disk and add jitter.

    Returns:
        positions: Array of shape (count, 3), float32
    """
    angles = branch_angles + spin_angles
    positions = np.empty((len(radii), 3), dtype=np.float32)
    positions[:, 0] = np.cos(angles) * radii + jitter[:, 0]
    positions[:, 1] = jitter[:, 1]
    positions[:, 2] = np.sin(angles) * radii + jitter[:, 2]
    return positions


def compute_interpolation_factors(radii: np.ndarray, radius: float) -> np.ndarray:
    """
    Color interpolation factor from the orbit radius (before jitter).

    A zero galaxy radius means every particle sits at the center, so all
    factors are 0.
    """
    if radius == 0:
        return np.zeros_like(radii)
    return radii / radius


def validate_parameters(params: GalaxyParameters) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reject parameter values the generator cannot work with.

    Radius is not checked: zero or negative radii give a degenerate but
    well-defined galaxy.

    Returns:
        Tuple of (inside_rgb, outside_rgb) parsed colors
    """
    if params.count < 0:
        raise InvalidParameter("count", params.count, "must be >= 0")
    if params.branches < 1:
        raise InvalidParameter("branches", params.branches, "must be >= 1")
    if params.randomness_power < 0:
        raise InvalidParameter(
            "randomness_power", params.randomness_power, "must be >= 0"
        )
    inside = parse_color(params.inside_color, "inside_color")
    outside = parse_color(params.outside_color, "outside_color")
    return inside, outside


class GalaxyGenerator:
    """Builds galaxies and retires the previous one on every call."""

    def __init__(
        self,
        rng=None,
        seed: Optional[int] = None,
        on_dispose: Optional[Callable[[GeneratedGalaxy], None]] = None,
        verbose: bool = False,
    ):
        """
        Initialize the generator.

        Args:
            rng: Uniform [0, 1) random source with a random(size) method
                (created from seed if None)
            seed: Random seed for reproducibility, used only when rng is None
            on_dispose: Called with each galaxy as it is retired
            verbose: Print generation progress
        """
        if rng is None:
            rng = np.random.default_rng(seed)
        self.rng = rng
        self.on_dispose = on_dispose
        self.verbose = verbose
        self._current: Optional[GeneratedGalaxy] = None

    @property
    def current(self) -> Optional[GeneratedGalaxy]:
        """The live galaxy, or None before the first generation."""
        return self._current

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def dispose(self):
        """Retire the live galaxy, if any."""
        galaxy = self._current
        if galaxy is None:
            return
        self._current = None
        galaxy.dispose()
        if self.on_dispose is not None:
            self.on_dispose(galaxy)

    def generate(self, params: GalaxyParameters) -> GeneratedGalaxy:
        """
        Generate a complete new galaxy from a parameter snapshot.

        The previous galaxy is disposed first. If the parameters are invalid
        nothing is disposed and InvalidParameter is raised.

        Args:
            params: Galaxy parameters

        Returns:
            The new GeneratedGalaxy
        """
        params = params.snapshot()
        inside, outside = validate_parameters(params)
        count = int(params.count)
        branches = int(params.branches)

        self.dispose()

        self._log(f"Generating galaxy with {count} particles, {branches} branches...")
        self._log("\tSampling radii...")
        radii = sample_radii(count, params.radius, self.rng)
        spin_angles = compute_spin_angles(radii, params.spin)
        branch_angles = compute_branch_angles(count, branches)

        self._log("\tSampling jitter...")
        jitter = sample_jitter(count, params.randomness_power, self.rng)
        positions = compute_positions(radii, spin_angles, branch_angles, jitter)

        self._log("\tMixing colors...")
        t = compute_interpolation_factors(radii, params.radius)
        colors = mix_colors(inside, outside, t)

        galaxy = GeneratedGalaxy(positions.reshape(-1), colors.reshape(-1), params)
        self._current = galaxy
        return galaxy
