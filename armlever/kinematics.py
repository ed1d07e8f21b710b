"""
Segment lengths and elbow angle from smoothed landmark positions
"""
from dataclasses import dataclass

import numpy as np

from .config import DEGENERATE_EPSILON


@dataclass(frozen=True)
class Kinematics:
    upper_arm_length: float
    forearm_length: float
    elbow_angle: float  # degrees


def compute_kinematics(shoulder, elbow, hand):
    """
    Compute arm segment lengths and the elbow angle

    The angle is measured between the shoulder->elbow and elbow->hand
    directions, so a straight arm reads 0 degrees and a fully folded arm
    reads 180.

    Args:
        shoulder: Smoothed shoulder position
        elbow: Smoothed elbow position
        hand: Smoothed hand position

    Returns:
        Kinematics or None: None when a segment has collapsed to a point
    """
    shoulder = np.asarray(shoulder, dtype=float)
    elbow = np.asarray(elbow, dtype=float)
    hand = np.asarray(hand, dtype=float)

    upper_arm = elbow - shoulder
    forearm = hand - elbow
    upper_arm_length = float(np.linalg.norm(upper_arm))
    forearm_length = float(np.linalg.norm(forearm))

    if upper_arm_length < DEGENERATE_EPSILON or forearm_length < DEGENERATE_EPSILON:
        return None

    cos_angle = np.dot(upper_arm, forearm) / (upper_arm_length * forearm_length)
    # Rounding can push the cosine just outside [-1, 1]
    angle = float(np.degrees(np.arccos(np.clip(cos_angle, -1.0, 1.0))))

    return Kinematics(
        upper_arm_length=upper_arm_length,
        forearm_length=forearm_length,
        elbow_angle=angle
    )
