"""
Landmark tracking state supplied by the tracking collaborator each tick
"""
from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class Landmark(Enum):
    """The three tracked points of the arm lever"""
    SHOULDER = "shoulder"
    ELBOW = "elbow"
    HAND = "hand"


def as_vector(position):
    """Coerce any 3-sequence to a float numpy vector"""
    vec = np.asarray(position, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3D position, got shape {vec.shape}")
    return vec


@dataclass
class LandmarkSample:
    """
    Raw pose of one landmark for the current tick

    Attributes:
        position: World-space position in meters (y axis up)
        tracked: Whether the tracker currently sees this landmark
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    tracked: bool = False

    def __post_init__(self):
        self.position = as_vector(self.position)
        # A sample with a NaN or inf coordinate is unusable this tick
        self.tracked = bool(self.tracked) and bool(np.isfinite(self.position).all())


@dataclass
class TrackingFrame:
    """
    One tick of tracking input: a sample per landmark

    The tracker fills a frame before every engine tick. A landmark missing
    from the frame counts as untracked.
    """
    shoulder: LandmarkSample = field(default_factory=LandmarkSample)
    elbow: LandmarkSample = field(default_factory=LandmarkSample)
    hand: LandmarkSample = field(default_factory=LandmarkSample)
    timestamp: float = 0.0

    @classmethod
    def from_positions(cls, shoulder=None, elbow=None, hand=None, timestamp=0.0):
        """
        Build a frame from bare positions; a None position is untracked

        Args:
            shoulder: Shoulder position or None
            elbow: Elbow position or None
            hand: Hand position or None
            timestamp: Frame time in seconds

        Returns:
            TrackingFrame: Frame with tracked flags set from availability
        """
        def sample(position):
            if position is None:
                return LandmarkSample()
            return LandmarkSample(position=position, tracked=True)

        return cls(
            shoulder=sample(shoulder),
            elbow=sample(elbow),
            hand=sample(hand),
            timestamp=timestamp
        )

    def sample(self, landmark):
        """Return the sample stored for a landmark"""
        return getattr(self, landmark.value)

    def all_tracked(self):
        return all(
            self.sample(lm).tracked and np.isfinite(self.sample(lm).position).all()
            for lm in Landmark
        )

    def tracking_status(self):
        """Tracked flag per landmark, keyed by landmark name"""
        return {lm.value: self.sample(lm).tracked for lm in Landmark}
