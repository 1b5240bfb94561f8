"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from spiral_galaxy.state.parameters import GalaxyParameters


class FixedSource:
    """Random source that returns the same value for every draw."""

    def __init__(self, value: float):
        self.value = value
        self.calls = []

    def random(self, size=None):
        self.calls.append(size)
        return np.full(size, self.value, dtype=np.float64)


class ScriptedSource:
    """Random source returning one scripted value per call to random()."""

    def __init__(self, *values: float):
        self.values = list(values)

    def random(self, size=None):
        return np.full(size, self.values.pop(0), dtype=np.float64)


@pytest.fixture
def small_params():
    """Parameters small enough for fast tests."""
    return GalaxyParameters(
        count=600,
        radius=5.0,
        branches=3,
        spin=1.0,
        randomness_power=3.0,
        inside_color="#ff6030",
        outside_color="#1b3984",
    )


@pytest.fixture
def zero_source():
    return FixedSource(0.0)


@pytest.fixture
def fixed_source():
    return FixedSource


@pytest.fixture
def scripted_source():
    return ScriptedSource
