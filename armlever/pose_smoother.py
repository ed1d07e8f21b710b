"""
Exponential smoothing of tracked landmark positions
"""
import logging

import numpy as np

from .landmarks import Landmark, as_vector

logger = logging.getLogger(__name__)


class PoseSmoother:
    """
    Independent exponential filter per landmark

    The smoothing factor is the fraction of the old value kept each tick:
    values near 1 smooth heavily (more lag), values near 0 follow the raw
    signal closely.
    """

    def __init__(self, smoothing_factor=0.3):
        """
        Args:
            smoothing_factor: Retained fraction of the previous value, in (0, 1)
        """
        if not 0.0 < smoothing_factor < 1.0:
            raise ValueError(f"smoothing_factor must lie in (0, 1), got {smoothing_factor}")
        self.smoothing_factor = smoothing_factor
        # None marks a landmark that has never been tracked
        self._smoothed = {lm: None for lm in Landmark}

    def update(self, landmark, raw_position, is_tracked):
        """
        Feed one raw sample into the filter

        Args:
            landmark: Which landmark the sample belongs to
            raw_position: Raw 3D position from the tracker
            is_tracked: Tracker status for this tick

        Returns:
            numpy.ndarray or None: Smoothed position, None if never tracked
        """
        current = self._smoothed[landmark]
        raw = as_vector(raw_position)

        if is_tracked and not np.isfinite(raw).all():
            logger.warning("Non-finite %s sample %s treated as untracked", landmark.value, raw)
            is_tracked = False

        if not is_tracked:
            return None if current is None else current.copy()

        if current is None:
            # Seed directly so the value never sweeps in from the origin
            logger.debug("Seeding %s at %s", landmark.value, raw)
            smoothed = raw.copy()
        else:
            t = 1.0 - self.smoothing_factor
            smoothed = current + (raw - current) * t

        self._smoothed[landmark] = smoothed
        return smoothed.copy()

    def update_frame(self, frame):
        """
        Update all three landmarks from a tracking frame

        Returns:
            dict: Smoothed position (or None) keyed by Landmark
        """
        return {
            lm: self.update(lm, frame.sample(lm).position, frame.sample(lm).tracked)
            for lm in Landmark
        }

    def position(self, landmark):
        current = self._smoothed[landmark]
        return None if current is None else current.copy()

    def is_seeded(self, landmark):
        return self._smoothed[landmark] is not None

    def reset(self):
        """Forget every landmark so the next tracked sample seeds again"""
        self._smoothed = {lm: None for lm in Landmark}
