"""
Shared fixtures: the textbook 90-degree curl pose
"""
import numpy as np
import pytest

from armlever.config import ArmConfiguration


@pytest.fixture
def curl_pose():
    """Upper arm vertical, forearm horizontal, 30 cm to the hand"""
    shoulder = np.array([0.0, 0.5, 0.0])
    elbow = np.array([0.0, 0.0, 0.0])
    hand = np.array([0.3, 0.0, 0.0])
    return shoulder, elbow, hand


@pytest.fixture
def textbook_config():
    return ArmConfiguration(
        forearm_mass=2.0,
        bicep_insertion_distance=0.05,
        tricep_insertion_distance=0.025,
        hand_load_mass=5.0
    )
