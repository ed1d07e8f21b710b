"""
Arm Lever Biomechanics Package
"""

from .biomechanical_calculator import TorqueBalanceSolver, TorqueSolution
from .config import ArmConfiguration, ConfigurationError, parse_mass
from .data_panel import ViewMode, format_readout, mode_explanation, solutions_to_dataframe
from .engine import ArmLeverEngine, EngineOutput
from .force_equilibrium import ForceEquilibriumSolution, solve_force_equilibrium, solve_joint_reaction
from .kinematics import Kinematics, compute_kinematics
from .landmarks import Landmark, LandmarkSample, TrackingFrame
from .muscle_mode import MuscleMode, MuscleModeState
from .pose_smoother import PoseSmoother

__version__ = "1.0.0"
__author__ = "Biomechanics Education Team"

__all__ = [
    "ArmConfiguration",
    "ArmLeverEngine",
    "ConfigurationError",
    "EngineOutput",
    "ForceEquilibriumSolution",
    "Kinematics",
    "Landmark",
    "LandmarkSample",
    "MuscleMode",
    "MuscleModeState",
    "PoseSmoother",
    "TorqueBalanceSolver",
    "TorqueSolution",
    "TrackingFrame",
    "ViewMode",
    "compute_kinematics",
    "format_readout",
    "mode_explanation",
    "parse_mass",
    "solutions_to_dataframe",
    "solve_force_equilibrium",
    "solve_joint_reaction"
]
