"""
Per-tick orchestration: tracking frame in, physics snapshot out
"""
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .biomechanical_calculator import TorqueBalanceSolver, TorqueSolution
from .config import ArmConfiguration, parse_mass
from .force_equilibrium import ForceEquilibriumSolution, solve_force_equilibrium
from .kinematics import Kinematics, compute_kinematics
from .landmarks import Landmark
from .muscle_mode import MuscleMode, MuscleModeState
from .pose_smoother import PoseSmoother

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineOutput:
    """Read-only snapshot valid for a single tick"""
    timestamp: float
    shoulder: np.ndarray
    elbow: np.ndarray
    hand: np.ndarray
    kinematics: Kinematics
    torque: TorqueSolution
    equilibrium: Optional[ForceEquilibriumSolution] = None

    @property
    def forearm_center(self):
        return (self.elbow + self.hand) / 2.0


class ArmLeverEngine:
    """
    Owns all mutable state of the arm model: smoothed poses, mode, config

    Separate instances never share state, so tests and parallel sessions
    can each hold their own engine.
    """

    def __init__(self, config=None, mode=MuscleMode.BICEPS):
        self._config = config or ArmConfiguration()
        self.smoother = PoseSmoother(self._config.smoothing_factor)
        self.mode_state = MuscleModeState(mode)
        self._solver = TorqueBalanceSolver(self._config)

    @property
    def config(self):
        return self._config

    @property
    def mode(self):
        return self.mode_state.mode

    def set_mode(self, mode):
        return self.mode_state.set_mode(mode)

    def set_hand_load_mass(self, mass_kg):
        """Replace the hand load; raises ConfigurationError when invalid"""
        self._config = self._config.with_hand_load(mass_kg)
        self._solver = TorqueBalanceSolver(self._config)
        logger.info("Weight updated to: %.2f kg", self._config.hand_load_mass)

    def set_hand_load_text(self, text):
        """
        Update the hand load from user-typed text

        Args:
            text: Contents of the weight input field

        Returns:
            bool: True if accepted, False if rejected and the old value kept
        """
        mass, accepted = parse_mass(text, self._config.hand_load_mass)
        if accepted:
            self.set_hand_load_mass(mass)
        return accepted

    def reset(self):
        """Drop smoothing history, e.g. when a new video starts"""
        self.smoother.reset()

    def tick(self, frame, include_joint_reaction=False):
        """
        Advance the engine by one tracking frame

        Args:
            frame: TrackingFrame written by the tracker for this tick
            include_joint_reaction: Also solve the joint reaction force

        Returns:
            EngineOutput or None: None when a landmark is untracked or the
            arm geometry is degenerate this tick
        """
        smoothed = self.smoother.update_frame(frame)
        if not frame.all_tracked():
            return None

        shoulder = smoothed[Landmark.SHOULDER]
        elbow = smoothed[Landmark.ELBOW]
        hand = smoothed[Landmark.HAND]

        kinematics = compute_kinematics(shoulder, elbow, hand)
        if kinematics is None:
            logger.debug("Degenerate arm geometry at t=%.3f, skipping solve", frame.timestamp)
            return None

        torque = self._solver.solve(shoulder, elbow, hand, self.mode)
        equilibrium = solve_force_equilibrium(torque) if include_joint_reaction else None

        return EngineOutput(
            timestamp=frame.timestamp,
            shoulder=shoulder,
            elbow=elbow,
            hand=hand,
            kinematics=kinematics,
            torque=torque,
            equilibrium=equilibrium
        )

    def process_frames(self, frames, include_joint_reaction=False):
        """Yield (frame, output) for every frame in order"""
        for frame in frames:
            yield frame, self.tick(frame, include_joint_reaction)
