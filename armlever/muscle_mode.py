"""
Exercise modes and the physical rules each one carries

BICEPS (curl):
    Resistance is a weight pulling DOWN at the hand. The biceps inserts in
    front of the elbow and pulls toward the shoulder. Held weight and
    forearm weight both extend the elbow, so their torques add.

TRICEPS (pulldown):
    Resistance is a cable pulling the hand UP. The triceps inserts on the
    olecranon behind the elbow. Cable tension and forearm weight turn the
    forearm in opposite senses, so the load torque is their difference.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)

UP = np.array([0.0, 1.0, 0.0])
DOWN = np.array([0.0, -1.0, 0.0])


def _sum_torques(resistance_torque, forearm_torque):
    return resistance_torque + forearm_torque


def _opposed_torques(resistance_torque, forearm_torque):
    return abs(resistance_torque - forearm_torque)


@dataclass(frozen=True)
class ModeRules:
    """
    Everything the solver needs to know about an exercise mode

    Attributes:
        resistance_direction: Unit vector of the external load at the hand
        insertion_side: +1 along the forearm (anterior), -1 behind the elbow
        insertion_distance_field: ArmConfiguration field holding the insertion distance
        combine_torques: Rule merging resistance and forearm-weight torque
        resistance_label: Short readout label for the resistance force
        muscle_label: Short readout label for the muscle force
        description: Human-readable exercise name
    """
    resistance_direction: np.ndarray
    insertion_side: int
    insertion_distance_field: str
    combine_torques: Callable[[float, float], float]
    resistance_label: str
    muscle_label: str
    description: str


class MuscleMode(Enum):
    BICEPS = "biceps"
    TRICEPS = "triceps"

    @property
    def rules(self):
        return _MODE_RULES[self]

    @classmethod
    def parse(cls, text):
        """Look up a mode by name, case-insensitively"""
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            options = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown muscle mode {text!r}. Try: {options}") from None


_MODE_RULES = {
    MuscleMode.BICEPS: ModeRules(
        resistance_direction=DOWN,
        insertion_side=1,
        insertion_distance_field="bicep_insertion_distance",
        combine_torques=_sum_torques,
        resistance_label="W",
        muscle_label="F-biceps",
        description="Curl - weight pulls DOWN, biceps pulls UP"
    ),
    MuscleMode.TRICEPS: ModeRules(
        resistance_direction=UP,
        insertion_side=-1,
        insertion_distance_field="tricep_insertion_distance",
        combine_torques=_opposed_torques,
        resistance_label="T",
        muscle_label="F-triceps",
        description="Pulldown - cable pulls UP, triceps extends the elbow"
    ),
}


class MuscleModeState:
    """Current exercise mode; a switch takes effect on the next solve"""

    def __init__(self, mode=MuscleMode.BICEPS):
        self._mode = mode

    @property
    def mode(self):
        return self._mode

    def set_mode(self, mode):
        if not isinstance(mode, MuscleMode):
            mode = MuscleMode.parse(mode)
        if mode is not self._mode:
            logger.info("%s MODE: %s", mode.name, mode.rules.description)
        self._mode = mode
        return mode

    def set_biceps_mode(self):
        return self.set_mode(MuscleMode.BICEPS)

    def set_triceps_mode(self):
        return self.set_mode(MuscleMode.TRICEPS)

    def toggle(self):
        if self._mode is MuscleMode.BICEPS:
            return self.set_triceps_mode()
        return self.set_biceps_mode()
