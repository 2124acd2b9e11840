"""Tests for the skyline blocking profile."""

import math

import numpy as np
import pytest

from reflector_model.skyline import Skyline, azimuth_bucket, round_half_up


@pytest.fixture
def skyline() -> Skyline:
    return Skyline(enabled=True)


class TestRounding:
    @pytest.mark.parametrize("x, expected", [(2.5, 3), (-2.5, -2), (0.49, 0), (359.5, 360), (-0.5, 0)])
    def test_round_half_up(self, x, expected) -> None:
        assert round_half_up(x) == expected

    def test_bucket_wraps(self) -> None:
        assert azimuth_bucket(math.radians(359.6)) == 0
        assert azimuth_bucket(math.radians(-10.0)) == 350
        assert azimuth_bucket(math.radians(370.2)) == 10
        np.testing.assert_array_equal(azimuth_bucket(np.radians([0.0, 90.4, 180.6])), [0, 90, 181])


class TestLookup:
    def test_new_skyline_is_disabled_and_empty(self) -> None:
        s = Skyline()
        assert s.enabled is False
        assert s.altitudes.shape == (360,)
        assert s.blocking_altitude(1.0) == 0.0

    def test_lookup_uses_nearest_degree(self, skyline) -> None:
        skyline.set_altitude(math.radians(10.4), 0.3)
        assert skyline.blocking_altitude(math.radians(10.2)) == 0.3
        assert skyline.blocking_altitude(math.radians(9.6)) == 0.3
        assert skyline.blocking_altitude(math.radians(10.2) + 2 * math.pi) == 0.3
        assert skyline.blocking_altitude(math.radians(11.0)) == 0.0

    def test_negative_azimuths_wrap(self, skyline) -> None:
        skyline.set_altitude(math.radians(-10.0), 0.2)
        assert skyline.altitudes[350] == 0.2
        assert skyline.blocking_altitude(math.radians(350.0)) == 0.2
        assert skyline.blocking_altitude(math.radians(-10.0)) == 0.2

    def test_vectorised_lookup(self, skyline) -> None:
        skyline.altitudes[[0, 90, 180]] = [0.1, 0.2, 0.3]
        out = skyline.blocking_altitude(np.radians([0.0, 90.0, 180.0, 270.0]))
        np.testing.assert_allclose(out, [0.1, 0.2, 0.3, 0.0])

    def test_disabled_lookup_is_zero_for_arrays(self) -> None:
        s = Skyline()
        s.altitudes[:] = 0.5
        np.testing.assert_array_equal(s.blocking_altitude(np.zeros(4)), np.zeros(4))


class TestSetAltitude:
    def test_altitude_clamped_below(self, skyline) -> None:
        bucket = skyline.set_altitude(math.radians(45.0), -0.1)
        assert skyline.altitudes[bucket] == 0.0

    def test_altitude_clamped_above(self, skyline) -> None:
        bucket = skyline.set_altitude(math.radians(45.0), 2.0)
        assert skyline.altitudes[bucket] == math.pi / 2

    # The -180/+179.1 editor limits are kept as found; only the bucket mapping
    # (nearest degree, mod 360) is treated as contractual.
    def test_minus_180_lands_in_bucket_180(self, skyline) -> None:
        assert skyline.set_altitude(math.radians(-180.0), 0.4) == 180
        assert skyline.set_altitude(math.radians(-200.0), 0.4) == 180

    def test_upper_limit_is_clamped(self, skyline) -> None:
        assert skyline.set_altitude(math.radians(179.4), 0.4) == 179
        assert skyline.set_altitude(math.radians(250.0), 0.4) == 179

    def test_half_degree_bias_around_north(self, skyline) -> None:
        assert skyline.set_altitude(math.radians(-0.4), 0.1) == 0
        assert skyline.set_altitude(math.radians(-0.6), 0.1) == 359


class TestPaintRange:
    def test_first_point_sets_one_bucket(self, skyline) -> None:
        assert skyline.paint_range(None, math.radians(20.0), 0.5) == [20]
        assert np.count_nonzero(skyline.altitudes) == 1

    @pytest.mark.parametrize("start, end", [(10.0, 20.0), (20.0, 10.0)])
    def test_fast_drag_fills_every_bucket(self, skyline, start, end) -> None:
        skyline.paint_range(math.radians(start), math.radians(end), 0.5)
        np.testing.assert_array_equal(skyline.altitudes[10:21], np.full(11, 0.5))
        assert skyline.altitudes[9] == 0.0
        assert skyline.altitudes[21] == 0.0

    def test_backward_drag_includes_both_ends(self, skyline) -> None:
        buckets = skyline.paint_range(math.radians(20.0), math.radians(10.0), 0.5)
        assert set(buckets) == set(range(10, 21))
        assert skyline.altitudes[20] == 0.5

    def test_step_count_does_not_overshoot(self, skyline) -> None:
        # 0.1 + 0.2 style float noise must not add an extra bucket
        skyline.paint_range(math.radians(0.1 + 0.2), math.radians(5.3), 0.4)
        assert np.count_nonzero(skyline.altitudes) == 6
        assert skyline.altitudes[6] == 0.0

    def test_intermediate_buckets_get_new_altitude(self, skyline) -> None:
        skyline.set_altitude(math.radians(15.0), 0.1)
        skyline.paint_range(math.radians(10.0), math.radians(20.0), 0.6)
        assert skyline.altitudes[15] == 0.6

    def test_small_step_sets_only_target(self, skyline) -> None:
        skyline.paint_range(math.radians(10.0), math.radians(10.8), 0.3)
        assert skyline.altitudes[11] == 0.3
        assert skyline.altitudes[10] == 0.0

    def test_negative_editor_azimuths(self, skyline) -> None:
        skyline.paint_range(math.radians(-5.0), math.radians(5.0), 0.2)
        assert all(skyline.altitudes[b] == 0.2 for b in (355, 359, 0, 5))


class TestEnable:
    def test_disable_is_non_destructive(self, skyline) -> None:
        rng = np.random.default_rng(3)
        skyline.altitudes[:] = rng.uniform(0, math.pi / 2, 360)
        azimuths = np.radians(np.arange(360))
        before = skyline.blocking_altitude(azimuths).copy()
        skyline.set_enabled(False)
        np.testing.assert_array_equal(skyline.blocking_altitude(azimuths), 0.0)
        skyline.set_enabled(True)
        np.testing.assert_array_equal(skyline.blocking_altitude(azimuths), before)

    def test_transmission(self, skyline) -> None:
        skyline.set_altitude(math.radians(90.0), math.radians(20.0))
        assert skyline.transmission(math.radians(90.0), math.radians(10.0)) == 0.0
        assert skyline.transmission(math.radians(90.0), math.radians(30.0)) == 1.0
        assert skyline.is_blocked(math.radians(90.0), math.radians(10.0)) is True

    def test_disabled_skyline_still_blocks_below_horizon(self) -> None:
        s = Skyline()
        np.testing.assert_array_equal(s.transmission(np.zeros(3), np.array([-0.1, 0.0, 0.1])), [0.0, 1.0, 1.0])
