"""Tests for how the visualizer attaches point clouds to generated galaxies."""

from types import SimpleNamespace

import pytest

from spiral_galaxy.generation.generators import GalaxyGenerator
from spiral_galaxy.state.parameters import GalaxyParameters

try:
    from spiral_galaxy.visualization import renderer
except Exception as e:  # no usable window backend on this machine
    pytest.skip(f"vispy backend unavailable: {e}", allow_module_level=True)


class FakeMarkers:
    def __init__(self, **kwargs):
        self.parent = None
        self.data = None

    def set_gl_state(self, *args, **kwargs):
        pass

    def set_data(self, pos, **kwargs):
        self.data = (pos, kwargs)


class FakeView:
    def add(self, node):
        node.parent = self


@pytest.fixture
def visualizer(monkeypatch):
    monkeypatch.setattr(renderer, "visuals", SimpleNamespace(Markers=FakeMarkers))
    viz = object.__new__(renderer.GalaxyVisualizer)
    viz.view = FakeView()
    viz.points = None
    viz._color_mode = True
    return viz


def test_generator_hook_survives_uploads(visualizer):
    retired = []
    generator = GalaxyGenerator(seed=0, on_dispose=retired.append)
    params = GalaxyParameters(count=200)

    first = generator.generate(params)
    visualizer._upload(first)
    first_points = visualizer.points
    assert first_points.parent is visualizer.view

    second = generator.generate(params)
    visualizer._upload(second)

    assert retired == [first]
    assert first_points.parent is None
    assert visualizer.points is not first_points
    assert visualizer.points.parent is visualizer.view


def test_dispose_detaches_only_its_own_points(visualizer):
    generator = GalaxyGenerator(seed=0)
    galaxy = generator.generate(GalaxyParameters(count=100))
    visualizer._upload(galaxy)
    points = visualizer.points

    generator.dispose()

    assert points.parent is None
    assert visualizer.points is None


def test_empty_galaxy_adds_nothing(visualizer):
    galaxy = GalaxyGenerator(seed=0).generate(GalaxyParameters(count=0))
    visualizer._upload(galaxy)
    assert visualizer.points is None
    galaxy.dispose()
