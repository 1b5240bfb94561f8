"""Tests for spiral galaxy generation."""

import numpy as np
import pytest

from spiral_galaxy.errors import GalaxyDisposedError, InvalidParameter
from spiral_galaxy.generation.generators import (
    GalaxyGenerator,
    compute_branch_angles,
    compute_interpolation_factors,
    sample_jitter,
    sample_radii,
)
from spiral_galaxy.state.parameters import GalaxyParameters
from spiral_galaxy.visualization.colors import parse_color


def rgb32(color):
    return parse_color(color).astype(np.float32)


class TestBufferShapes:
    def test_lengths_are_three_per_particle(self, small_params):
        galaxy = GalaxyGenerator(seed=1).generate(small_params)
        assert galaxy.positions.shape == (3 * small_params.count,)
        assert galaxy.colors.shape == (3 * small_params.count,)
        assert galaxy.count == small_params.count

    def test_buffers_are_float32(self, small_params):
        galaxy = GalaxyGenerator(seed=1).generate(small_params)
        assert galaxy.positions.dtype == np.float32
        assert galaxy.colors.dtype == np.float32

    def test_xyz_views_match_flat_buffers(self, small_params):
        galaxy = GalaxyGenerator(seed=1).generate(small_params)
        assert galaxy.positions_xyz.shape == (small_params.count, 3)
        np.testing.assert_array_equal(galaxy.positions_xyz[2], galaxy.positions[6:9])
        np.testing.assert_array_equal(galaxy.colors_rgb[2], galaxy.colors[6:9])

    def test_zero_count_gives_empty_buffers(self, small_params):
        small_params.count = 0
        galaxy = GalaxyGenerator(seed=1).generate(small_params)
        assert len(galaxy.positions) == 0
        assert len(galaxy.colors) == 0

    def test_all_values_finite(self, small_params):
        galaxy = GalaxyGenerator(seed=3).generate(small_params)
        assert np.all(np.isfinite(galaxy.positions))
        assert np.all(np.isfinite(galaxy.colors))


class TestSampling:
    def test_radii_within_galaxy_radius(self):
        radii = sample_radii(1000, 5.0, np.random.default_rng(0))
        assert radii.min() >= 0.0
        assert radii.max() < 5.0

    def test_interpolation_factors_in_unit_range(self):
        radii = sample_radii(1000, 7.5, np.random.default_rng(0))
        t = compute_interpolation_factors(radii, 7.5)
        assert t.min() >= 0.0
        assert t.max() <= 1.0

    def test_interpolation_factor_zero_radius(self):
        t = compute_interpolation_factors(np.zeros(4), 0.0)
        np.testing.assert_array_equal(t, np.zeros(4))

    def test_branch_angles_round_robin(self):
        branches = 4
        angles = compute_branch_angles(20, branches)
        np.testing.assert_array_equal(angles[:-branches], angles[branches:])
        np.testing.assert_allclose(angles[:branches], np.arange(4) / 4 * 2 * np.pi)

    def test_branch_populations_balanced(self):
        angles = compute_branch_angles(10, 3)
        _, counts = np.unique(angles, return_counts=True)
        assert sorted(counts) == [3, 3, 4]

    def test_jitter_symmetric_and_bounded(self):
        jitter = sample_jitter(10000, 3.0, np.random.default_rng(5))
        assert jitter.shape == (10000, 3)
        assert np.abs(jitter).max() <= 1.0
        assert abs(jitter.mean()) < 0.02
        assert (jitter > 0).any() and (jitter < 0).any()

    def test_higher_power_clusters_tighter(self):
        loose = sample_jitter(10000, 2.0, np.random.default_rng(5))
        tight = sample_jitter(10000, 10.0, np.random.default_rng(5))
        assert np.abs(tight).mean() < np.abs(loose).mean()

    def test_draw_order(self, fixed_source, small_params):
        source = fixed_source(0.25)
        GalaxyGenerator(rng=source).generate(small_params)
        n = small_params.count
        assert source.calls == [n, (n, 3), (n, 3)]


class TestMockedSource:
    def test_single_particle_at_origin(self, zero_source):
        params = GalaxyParameters(
            count=1, radius=5.0, branches=1, spin=0.0, randomness_power=1.0
        )
        galaxy = GalaxyGenerator(rng=zero_source).generate(params)
        np.testing.assert_array_equal(galaxy.positions, np.zeros(3, dtype=np.float32))
        np.testing.assert_array_equal(galaxy.colors, rgb32(params.inside_color))

    def test_center_gets_inside_color(self, zero_source, small_params):
        galaxy = GalaxyGenerator(rng=zero_source).generate(small_params)
        for rgb in galaxy.colors_rgb:
            np.testing.assert_array_equal(rgb, rgb32(small_params.inside_color))

    def test_rim_gets_outside_color(self, scripted_source):
        params = GalaxyParameters(
            count=5,
            radius=5.0,
            branches=1,
            spin=0.0,
            inside_color="#ff6030",
            outside_color="#1b3984",
        )
        # radius draw 1.0, zero jitter magnitude, positive sign
        source = scripted_source(1.0, 0.0, 0.0)
        galaxy = GalaxyGenerator(rng=source).generate(params)
        for rgb in galaxy.colors_rgb:
            np.testing.assert_array_equal(rgb, rgb32(params.outside_color))
        np.testing.assert_allclose(galaxy.positions_xyz[0], [5.0, 0.0, 0.0], atol=1e-6)

    def test_color_uses_orbit_radius_not_jittered_position(self, scripted_source):
        params = GalaxyParameters(count=3, radius=4.0, branches=1, spin=0.0)
        # Zero orbit radius with full-size jitter
        source = scripted_source(0.0, 1.0, 0.0)
        galaxy = GalaxyGenerator(rng=source).generate(params)
        np.testing.assert_array_equal(galaxy.positions_xyz[0], [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(galaxy.colors_rgb[0], rgb32(params.inside_color))

    def test_same_branch_particles_coincide(self, scripted_source):
        params = GalaxyParameters(count=12, radius=2.0, branches=4, spin=0.7)
        galaxy = GalaxyGenerator(rng=scripted_source(0.5, 0.0, 0.0)).generate(params)
        xyz = galaxy.positions_xyz
        np.testing.assert_array_equal(xyz[:-4], xyz[4:])
        # Flat disk
        np.testing.assert_array_equal(xyz[:, 1], np.zeros(12, dtype=np.float32))
        # All particles at the sampled orbit radius
        np.testing.assert_allclose(np.hypot(xyz[:, 0], xyz[:, 2]), 1.0, rtol=1e-6)

    def test_spin_rotates_with_radius(self, scripted_source):
        params = GalaxyParameters(count=1, radius=2.0, branches=2, spin=np.pi / 2)
        # radius_0 = 1.0, spin angle = pi / 2
        galaxy = GalaxyGenerator(rng=scripted_source(0.5, 0.0, 0.0)).generate(params)
        np.testing.assert_allclose(galaxy.positions_xyz[0], [0.0, 0.0, 1.0], atol=1e-6)


class TestDeterminism:
    def test_same_seed_same_buffers(self, small_params):
        first = GalaxyGenerator(seed=42).generate(small_params)
        second = GalaxyGenerator(seed=42).generate(small_params)
        np.testing.assert_array_equal(first.positions, second.positions)
        np.testing.assert_array_equal(first.colors, second.colors)

    def test_fixed_source_repeats(self, fixed_source, small_params):
        generator = GalaxyGenerator(rng=fixed_source(0.3))
        first = generator.generate(small_params)
        positions, colors = first.positions.copy(), first.colors.copy()
        second = generator.generate(small_params)
        np.testing.assert_array_equal(positions, second.positions)
        np.testing.assert_array_equal(colors, second.colors)

    def test_randomness_field_does_not_change_output(self, small_params):
        first = GalaxyGenerator(seed=9).generate(small_params)
        changed = small_params.snapshot()
        changed.randomness = 1.7
        second = GalaxyGenerator(seed=9).generate(changed)
        np.testing.assert_array_equal(first.positions, second.positions)
        np.testing.assert_array_equal(first.colors, second.colors)

    def test_galaxy_keeps_parameter_snapshot(self, small_params):
        galaxy = GalaxyGenerator(seed=1).generate(small_params)
        small_params.count = 100
        assert galaxy.parameters.count == 600


class TestLifecycle:
    def test_dispose_hook_fires_n_minus_one_times(self, small_params):
        retired = []
        generator = GalaxyGenerator(seed=0, on_dispose=retired.append)
        galaxies = []
        for count in (100, 250, 50, 400):
            small_params.count = count
            galaxies.append(generator.generate(small_params))

        assert len(retired) == 3
        assert retired == galaxies[:3]
        assert all(g.disposed for g in galaxies[:3])
        assert not galaxies[-1].disposed
        assert generator.current is galaxies[-1]

    def test_disposed_buffers_unavailable(self, small_params):
        generator = GalaxyGenerator(seed=0)
        old = generator.generate(small_params)
        generator.generate(small_params)
        with pytest.raises(GalaxyDisposedError):
            old.positions
        with pytest.raises(GalaxyDisposedError):
            old.colors

    def test_galaxy_callbacks_fire_once(self, small_params):
        fired = []
        galaxy = GalaxyGenerator(seed=0).generate(small_params)
        galaxy.add_dispose_callback(fired.append)
        galaxy.dispose()
        galaxy.dispose()
        assert fired == [galaxy]

    def test_generator_dispose_without_galaxy(self):
        retired = []
        generator = GalaxyGenerator(on_dispose=retired.append)
        generator.dispose()
        assert retired == []
        assert generator.current is None

    def test_generator_dispose_retires_current(self, small_params):
        retired = []
        generator = GalaxyGenerator(seed=0, on_dispose=retired.append)
        galaxy = generator.generate(small_params)
        generator.dispose()
        assert retired == [galaxy]
        assert generator.current is None


class TestInvalidParameters:
    @pytest.mark.parametrize(
        "name, value",
        [
            ("count", -1),
            ("branches", 0),
            ("branches", -3),
            ("randomness_power", -0.5),
            ("inside_color", "not-a-color"),
        ],
    )
    def test_rejected_and_previous_galaxy_kept(self, small_params, name, value):
        retired = []
        generator = GalaxyGenerator(seed=0, on_dispose=retired.append)
        previous = generator.generate(small_params)

        bad = small_params.snapshot()
        bad.set(name, value)
        with pytest.raises(InvalidParameter) as excinfo:
            generator.generate(bad)

        assert excinfo.value.name == name
        assert generator.current is previous
        assert not previous.disposed
        assert retired == []

    def test_invalid_parameter_is_value_error(self, small_params):
        small_params.count = -10
        with pytest.raises(ValueError):
            GalaxyGenerator().generate(small_params)

    def test_zero_radius_is_degenerate_not_error(self, small_params):
        small_params.radius = 0.0
        galaxy = GalaxyGenerator(seed=2).generate(small_params)
        assert np.all(np.isfinite(galaxy.colors))
        for rgb in galaxy.colors_rgb:
            np.testing.assert_array_equal(rgb, rgb32(small_params.inside_color))

    def test_negative_radius_is_degenerate_not_error(self, small_params):
        small_params.radius = -2.0
        galaxy = GalaxyGenerator(seed=2).generate(small_params)
        assert galaxy.count == small_params.count
        assert np.all(np.isfinite(galaxy.positions))
