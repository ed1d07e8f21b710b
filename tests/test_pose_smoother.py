"""
Unit tests for the per-landmark exponential smoother.
"""

import numpy as np
import pytest

from armlever.landmarks import Landmark, TrackingFrame
from armlever.pose_smoother import PoseSmoother


class TestSeeding:
    """The first tracked sample must be taken verbatim."""

    def test_first_tracked_sample_is_exact(self):
        smoother = PoseSmoother(smoothing_factor=0.3)
        raw = np.array([0.12, -0.4, 1.7])

        smoothed = smoother.update(Landmark.ELBOW, raw, True)

        np.testing.assert_array_equal(smoothed, raw)

    def test_untracked_before_seed_returns_none(self):
        smoother = PoseSmoother()

        assert smoother.update(Landmark.HAND, [1.0, 2.0, 3.0], False) is None
        assert not smoother.is_seeded(Landmark.HAND)

    def test_untracked_sample_does_not_seed(self):
        smoother = PoseSmoother()
        smoother.update(Landmark.HAND, [9.0, 9.0, 9.0], False)

        smoothed = smoother.update(Landmark.HAND, [1.0, 0.0, 0.0], True)

        np.testing.assert_array_equal(smoothed, [1.0, 0.0, 0.0])

    def test_reset_reseeds(self):
        smoother = PoseSmoother()
        smoother.update(Landmark.SHOULDER, [0.0, 0.0, 0.0], True)
        smoother.reset()

        smoothed = smoother.update(Landmark.SHOULDER, [5.0, 5.0, 5.0], True)

        np.testing.assert_array_equal(smoothed, [5.0, 5.0, 5.0])


class TestFiltering:
    """Blending, holding and convergence."""

    def test_lerp_keeps_smoothing_factor_of_old_value(self):
        smoother = PoseSmoother(smoothing_factor=0.3)
        smoother.update(Landmark.HAND, [0.0, 0.0, 0.0], True)

        smoothed = smoother.update(Landmark.HAND, [1.0, 0.0, 0.0], True)

        np.testing.assert_allclose(smoothed, [0.7, 0.0, 0.0])

    def test_untracked_holds_last_value(self):
        smoother = PoseSmoother(smoothing_factor=0.5)
        smoother.update(Landmark.HAND, [0.0, 0.0, 0.0], True)
        held = smoother.update(Landmark.HAND, [1.0, 0.0, 0.0], True)

        for _ in range(5):
            value = smoother.update(Landmark.HAND, [100.0, 100.0, 100.0], False)
            np.testing.assert_array_equal(value, held)

    def test_converges_without_overshoot(self):
        smoother = PoseSmoother(smoothing_factor=0.8)
        smoother.update(Landmark.ELBOW, [0.0, 0.0, 0.0], True)
        target = np.array([1.0, -2.0, 0.5])

        previous_distance = np.linalg.norm(target)
        for _ in range(60):
            value = smoother.update(Landmark.ELBOW, target, True)
            distance = np.linalg.norm(target - value)
            assert distance <= previous_distance
            # Every component stays between the start and the target
            assert np.all(np.abs(value) <= np.abs(target) + 1e-12)
            assert np.all(np.sign(value) * np.sign(target) >= 0)
            previous_distance = distance

        np.testing.assert_allclose(value, target, atol=1e-4)

    def test_non_finite_sample_keeps_last_value(self):
        smoother = PoseSmoother(smoothing_factor=0.5)
        held = smoother.update(Landmark.HAND, [0.2, 0.0, 0.0], True)

        value = smoother.update(Landmark.HAND, [np.nan, 0.0, 0.0], True)

        np.testing.assert_array_equal(value, held)
        np.testing.assert_array_equal(smoother.position(Landmark.HAND), held)

    def test_landmarks_are_independent(self):
        smoother = PoseSmoother()
        smoother.update(Landmark.SHOULDER, [1.0, 1.0, 1.0], True)

        assert smoother.position(Landmark.ELBOW) is None
        np.testing.assert_array_equal(smoother.position(Landmark.SHOULDER), [1.0, 1.0, 1.0])

    def test_instances_do_not_share_state(self):
        a = PoseSmoother()
        b = PoseSmoother()
        a.update(Landmark.HAND, [1.0, 2.0, 3.0], True)

        assert not b.is_seeded(Landmark.HAND)

    def test_returned_value_is_a_copy(self):
        smoother = PoseSmoother()
        value = smoother.update(Landmark.HAND, [1.0, 2.0, 3.0], True)
        value[0] = 42.0

        np.testing.assert_array_equal(smoother.position(Landmark.HAND), [1.0, 2.0, 3.0])

    def test_update_frame_smooths_every_landmark(self):
        smoother = PoseSmoother()
        frame = TrackingFrame.from_positions(
            shoulder=[0.0, 0.5, 0.0], elbow=[0.0, 0.0, 0.0], hand=None
        )

        result = smoother.update_frame(frame)

        np.testing.assert_array_equal(result[Landmark.SHOULDER], [0.0, 0.5, 0.0])
        np.testing.assert_array_equal(result[Landmark.ELBOW], [0.0, 0.0, 0.0])
        assert result[Landmark.HAND] is None


@pytest.mark.parametrize("factor", [0.0, 1.0, -0.1, 1.5])
def test_rejects_out_of_range_factor(factor):
    with pytest.raises(ValueError):
        PoseSmoother(smoothing_factor=factor)
