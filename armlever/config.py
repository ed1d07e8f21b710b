"""
Physical constants and arm configuration

Defaults describe the PASCO classroom arm model the visualization was
calibrated against rather than a full-size adult forearm.
"""
import logging
import math
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

GRAVITY = 9.81  # m/s²

# Below this the muscle line of action passes through the elbow
MIN_MUSCLE_MOMENT_ARM = 0.001  # m

# Segments shorter than this have no usable direction
DEGENERATE_EPSILON = 1e-6  # m


class ConfigurationError(ValueError):
    """Raised when an arm configuration value is out of range"""


@dataclass(frozen=True)
class ArmConfiguration:
    """
    Per-session parameters of the arm model

    Attributes:
        forearm_mass: Mass of the forearm segment in kg
        bicep_insertion_distance: Biceps insertion distance from the elbow in m
        tricep_insertion_distance: Triceps (olecranon) offset behind the elbow in m
        smoothing_factor: Retained fraction of the previous pose, in (0, 1)
        hand_load_mass: Load held at the hand in kg
    """
    forearm_mass: float = 0.10
    bicep_insertion_distance: float = 0.05
    tricep_insertion_distance: float = 0.025
    smoothing_factor: float = 0.3
    hand_load_mass: float = 0.0

    def __post_init__(self):
        for name in ("forearm_mass", "hand_load_mass"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number, got {value}")
        for name in ("bicep_insertion_distance", "tricep_insertion_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if not 0.0 < self.smoothing_factor < 1.0:
            raise ConfigurationError(
                f"smoothing_factor must lie in (0, 1), got {self.smoothing_factor}"
            )

    def with_hand_load(self, mass_kg):
        """Return a copy carrying a new hand load mass"""
        return replace(self, hand_load_mass=float(mass_kg))

    @property
    def resistance_force(self):
        """Weight of the hand load in Newtons"""
        return self.hand_load_mass * GRAVITY

    @property
    def forearm_weight_force(self):
        """Weight of the forearm in Newtons"""
        return self.forearm_mass * GRAVITY


def parse_mass(text, previous):
    """
    Parse a user-typed mass, keeping the previous value on bad input

    Args:
        text: Raw text from an input field
        previous: Mass to keep if the text is rejected

    Returns:
        tuple: (mass_kg, accepted)
    """
    try:
        value = float(str(text).strip())
    except (TypeError, ValueError):
        logger.warning("Invalid weight input %r, keeping %.2f kg", text, previous)
        return previous, False

    if not math.isfinite(value) or value < 0:
        logger.warning("Rejected weight %r, keeping %.2f kg", text, previous)
        return previous, False

    return value, True
