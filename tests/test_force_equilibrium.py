"""
Unit tests for the joint reaction force.
"""

import numpy as np
import pytest

from armlever.biomechanical_calculator import TorqueBalanceSolver
from armlever.force_equilibrium import (
    ForceEquilibriumSolution,
    solve_force_equilibrium,
    solve_joint_reaction,
)
from armlever.muscle_mode import MuscleMode


class TestSolveJointReaction:

    def test_closes_force_sum(self):
        resistance = np.array([0.0, -49.05, 0.0])
        forearm = np.array([0.0, -19.62, 0.0])
        muscle = np.array([-35.3, 353.2, 0.0])

        reaction = solve_joint_reaction(resistance, forearm, muscle)

        np.testing.assert_allclose(resistance + forearm + muscle + reaction, np.zeros(3), atol=1e-12)

    def test_accepts_plain_sequences(self):
        reaction = solve_joint_reaction([0, -1, 0], [0, -2, 0], [0, 10, 0])

        np.testing.assert_allclose(reaction, [0.0, -7.0, 0.0])

    def test_propagates_nan(self):
        reaction = solve_joint_reaction([np.nan, 0, 0], [0, -1, 0], [0, 1, 0])

        assert np.isnan(reaction[0])


class TestSolveForceEquilibrium:

    @pytest.mark.parametrize("mode", list(MuscleMode))
    def test_equilibrium_holds_for_solutions(self, mode, textbook_config):
        solver = TorqueBalanceSolver(textbook_config)
        rng = np.random.default_rng(11)
        for _ in range(100):
            shoulder, elbow, hand = rng.uniform(-0.5, 0.5, size=(3, 3))
            eq = solve_force_equilibrium(solver.solve(shoulder, elbow, hand, mode))

            np.testing.assert_allclose(eq.residual(), np.zeros(3), atol=1e-9)

    def test_curl_vectors(self, curl_pose, textbook_config):
        torque = TorqueBalanceSolver(textbook_config).solve(*curl_pose, MuscleMode.BICEPS)
        eq = solve_force_equilibrium(torque)

        np.testing.assert_allclose(eq.resistance_force, [0.0, -49.05, 0.0])
        np.testing.assert_allclose(eq.forearm_weight, [0.0, -19.62, 0.0])
        assert np.linalg.norm(eq.muscle_force) == pytest.approx(torque.required_muscle_force)
        # The elbow is pushed down hard because the muscle pulls up far more than the load
        assert eq.joint_reaction[1] < 0
        assert eq.joint_reaction_magnitude > torque.resistance_force

    def test_triceps_forearm_weight_still_points_down(self, curl_pose, textbook_config):
        torque = TorqueBalanceSolver(textbook_config).solve(*curl_pose, MuscleMode.TRICEPS)
        eq = solve_force_equilibrium(torque)

        np.testing.assert_allclose(eq.resistance_force, [0.0, 49.05, 0.0])
        np.testing.assert_allclose(eq.forearm_weight, [0.0, -19.62, 0.0])

    def test_direction_is_unit_or_zero(self, curl_pose, textbook_config):
        eq = solve_force_equilibrium(TorqueBalanceSolver(textbook_config).solve(*curl_pose))

        assert np.linalg.norm(eq.joint_reaction_direction) == pytest.approx(1.0)

        zero = ForceEquilibriumSolution(np.zeros(3), np.zeros(3), np.zeros(3), np.zeros(3))
        np.testing.assert_array_equal(zero.joint_reaction_direction, np.zeros(3))
