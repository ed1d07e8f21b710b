"""
Joint reaction force closing the force balance on the forearm
"""
from dataclasses import dataclass

import numpy as np

from .muscle_mode import DOWN


@dataclass(frozen=True)
class ForceEquilibriumSolution:
    resistance_force: np.ndarray
    forearm_weight: np.ndarray
    muscle_force: np.ndarray
    joint_reaction: np.ndarray

    @property
    def joint_reaction_magnitude(self):
        return float(np.linalg.norm(self.joint_reaction))

    @property
    def joint_reaction_direction(self):
        magnitude = self.joint_reaction_magnitude
        if magnitude == 0:
            return np.zeros(3)
        return self.joint_reaction / magnitude

    def residual(self):
        """Net force on the forearm, zero up to rounding"""
        return self.resistance_force + self.forearm_weight + self.muscle_force + self.joint_reaction


def solve_joint_reaction(resistance_force, forearm_weight, muscle_force):
    """
    Force the upper arm exerts on the forearm at the elbow

    Args:
        resistance_force: Resistance force vector at the hand (N)
        forearm_weight: Forearm weight vector at its center (N)
        muscle_force: Muscle force vector at the insertion (N)

    Returns:
        numpy.ndarray: Reaction vector making the sum of forces zero
    """
    return -(np.asarray(muscle_force, dtype=float)
             + np.asarray(resistance_force, dtype=float)
             + np.asarray(forearm_weight, dtype=float))


def solve_force_equilibrium(solution):
    """
    Build the force vectors of a TorqueSolution and solve the joint reaction

    The solution must come from a tick where every landmark was tracked.
    """
    resistance_vec = solution.resistance_direction * solution.resistance_force
    forearm_vec = DOWN * solution.forearm_weight_force
    muscle_vec = solution.muscle_force_direction * solution.required_muscle_force

    return ForceEquilibriumSolution(
        resistance_force=resistance_vec,
        forearm_weight=forearm_vec,
        muscle_force=muscle_vec,
        joint_reaction=solve_joint_reaction(resistance_vec, forearm_vec, muscle_vec)
    )
