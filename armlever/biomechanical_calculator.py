"""
Torque balance at the elbow for a single-joint static arm lever
Based on standard free-body analysis of the forearm
"""
import logging
from dataclasses import dataclass

import numpy as np

from .config import ArmConfiguration, DEGENERATE_EPSILON, GRAVITY, MIN_MUSCLE_MOMENT_ARM
from .kinematics import compute_kinematics
from .muscle_mode import MuscleMode

logger = logging.getLogger(__name__)

FORWARD = np.array([0.0, 0.0, 1.0])


def normalize(vector):
    """Unit vector, or the zero vector when the input has no direction"""
    vector = np.asarray(vector, dtype=float)
    length = np.linalg.norm(vector)
    if length < DEGENERATE_EPSILON:
        return np.zeros(3)
    return vector / length


def horizontal_distance(origin, point):
    """
    Moment arm of a vertical force applied at `point` about `origin`

    Only the horizontal (x, z) offset contributes torque for a force acting
    along the y axis.
    """
    dx = point[0] - origin[0]
    dz = point[2] - origin[2]
    return float(np.sqrt(dx * dx + dz * dz))


@dataclass(frozen=True)
class TorqueSolution:
    """
    Torque balance at the elbow for one tick

    Moment arms are true perpendicular distances to each line of action,
    not raw segment lengths.
    """
    mode: MuscleMode
    elbow_angle: float
    hand_moment_arm: float
    forearm_moment_arm: float
    muscle_moment_arm: float
    resistance_force: float
    forearm_weight_force: float
    resistance_torque: float
    forearm_torque: float
    total_load_torque: float
    required_muscle_force: float
    insertion_distance: float
    resistance_direction: np.ndarray
    muscle_force_direction: np.ndarray
    muscle_insertion_point: np.ndarray
    torque_axis: np.ndarray

    @property
    def mechanical_advantage(self):
        """Insertion distance over load moment arm, 0 with no load lever"""
        if self.hand_moment_arm <= 0:
            return 0.0
        return self.insertion_distance / self.hand_moment_arm

    @property
    def force_multiplier(self):
        """How many times the resistance force the muscle has to pull"""
        if self.resistance_force <= 0:
            return 0.0
        return self.required_muscle_force / self.resistance_force


class TorqueBalanceSolver:
    """
    Solves the static torque balance of the forearm about the elbow

    The engine calls `solve` only when every landmark is tracked; the solver
    itself never raises on degenerate geometry and instead returns zero
    moment arms and zero muscle force.
    """

    def __init__(self, config=None, gravity=GRAVITY):
        """
        Initialize solver with arm parameters

        Args:
            config: ArmConfiguration with masses and insertion distances
            gravity: Gravitational acceleration in m/s²
        """
        self.config = config or ArmConfiguration()
        self.gravity = gravity

    def muscle_insertion(self, elbow, hand, mode):
        """
        Locate the muscle insertion and its line of action

        Biceps inserts along the forearm in front of the elbow, triceps on
        the olecranon behind it. Both are modeled as pulling toward the
        shoulder.

        Args:
            elbow: Elbow position
            hand: Hand position
            mode: MuscleMode being simulated

        Returns:
            tuple: (insertion_point, insertion_distance)
        """
        distance = getattr(self.config, mode.rules.insertion_distance_field)
        forearm_dir = normalize(hand - elbow)
        insertion_point = elbow + forearm_dir * (mode.rules.insertion_side * distance)
        return insertion_point, distance

    def solve(self, shoulder, elbow, hand, mode=MuscleMode.BICEPS):
        """
        Compute moment arms, load torque and the muscle force that balances it

        Args:
            shoulder: Smoothed shoulder position (m)
            elbow: Smoothed elbow position (m)
            hand: Smoothed hand position (m)
            mode: MuscleMode selecting force directions and combination rule

        Returns:
            TorqueSolution: Balance solution for this pose

        References:
            - Winter DA. (2009). Biomechanics and Motor Control of Human
              Movement, 4th ed. Wiley. Ch. 5
            - Nordin M, Frankel VH. (2012). Basic Biomechanics of the
              Musculoskeletal System, 4th ed. Ch. 13 (elbow)
        """
        shoulder = np.asarray(shoulder, dtype=float)
        elbow = np.asarray(elbow, dtype=float)
        hand = np.asarray(hand, dtype=float)
        rules = mode.rules

        kinematics = compute_kinematics(shoulder, elbow, hand)
        elbow_angle = kinematics.elbow_angle if kinematics is not None else 0.0

        # Muscle line of action
        insertion_point, insertion_distance = self.muscle_insertion(elbow, hand, mode)
        muscle_dir = normalize(shoulder - insertion_point)

        # Resistance and forearm weight both act vertically
        hand_moment_arm = horizontal_distance(elbow, hand)
        forearm_center = (elbow + hand) / 2.0
        forearm_moment_arm = horizontal_distance(elbow, forearm_center)

        # Muscle force direction is arbitrary, so use the full cross product
        muscle_moment_arm = float(np.linalg.norm(np.cross(insertion_point - elbow, muscle_dir)))

        resistance_force = self.config.hand_load_mass * self.gravity
        forearm_weight_force = self.config.forearm_mass * self.gravity

        resistance_torque = resistance_force * hand_moment_arm
        forearm_torque = forearm_weight_force * forearm_moment_arm
        total_load_torque = rules.combine_torques(resistance_torque, forearm_torque)

        if muscle_moment_arm > MIN_MUSCLE_MOMENT_ARM:
            required_muscle_force = total_load_torque / muscle_moment_arm
        else:
            required_muscle_force = 0.0

        torque_axis = normalize(np.cross(hand - elbow, rules.resistance_direction))
        if not torque_axis.any():
            torque_axis = FORWARD.copy()

        solution = TorqueSolution(
            mode=mode,
            elbow_angle=elbow_angle,
            hand_moment_arm=hand_moment_arm,
            forearm_moment_arm=forearm_moment_arm,
            muscle_moment_arm=muscle_moment_arm,
            resistance_force=resistance_force,
            forearm_weight_force=forearm_weight_force,
            resistance_torque=resistance_torque,
            forearm_torque=forearm_torque,
            total_load_torque=total_load_torque,
            required_muscle_force=required_muscle_force,
            insertion_distance=insertion_distance,
            resistance_direction=rules.resistance_direction.copy(),
            muscle_force_direction=muscle_dir,
            muscle_insertion_point=insertion_point,
            torque_axis=torque_axis
        )

        logger.debug(
            "%s: angle=%.1f deg, r_hand=%.3f m, torque=%.2f N·m, muscle=%.2f N, MA=%.3f",
            mode.name, elbow_angle, hand_moment_arm, total_load_torque,
            required_muscle_force, solution.mechanical_advantage
        )
        return solution
