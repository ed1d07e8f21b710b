"""
Text readouts of the physics values for the UI
"""
from enum import Enum

import pandas as pd

from .muscle_mode import MuscleMode


class ViewMode(Enum):
    BASIC = "Forces & Balance"
    TORQUE_ANALYSIS = "Lever & Torque"
    ADVANCED = "Complete Analysis"

    @property
    def show_moment_arms(self):
        return self is not ViewMode.BASIC

    @property
    def show_joint_reaction(self):
        return self is ViewMode.ADVANCED

    @property
    def show_torque_vector(self):
        return self is ViewMode.ADVANCED


def format_readout(output, view_mode=ViewMode.BASIC):
    """
    Labelled strings for the physics data panel

    Args:
        output: EngineOutput for the current tick
        view_mode: ViewMode deciding which values are shown

    Returns:
        dict: Readout text keyed by quantity
    """
    torque = output.torque
    rules = torque.mode.rules

    readout = {
        "resistance": f"{rules.resistance_label} = {torque.resistance_force:.1f} N",
        "forearm_weight": f"W-arm = {torque.forearm_weight_force:.1f} N",
        "muscle_force": f"{rules.muscle_label} = {torque.required_muscle_force:.0f} N",
        "torque": f"τ = {torque.total_load_torque:.2f} N·m",
        "elbow_angle": f"θ = {torque.elbow_angle:.1f}°",
        "mechanical_advantage": f"Mech. Adv. = {torque.mechanical_advantage:.2f}",
    }

    if view_mode.show_moment_arms:
        readout["hand_moment_arm"] = f"r-hand = {torque.hand_moment_arm * 100:.1f} cm"
        readout["forearm_moment_arm"] = f"r-arm = {torque.forearm_moment_arm * 100:.1f} cm"
        readout["muscle_moment_arm"] = f"r-muscle = {torque.muscle_moment_arm * 100:.1f} cm"

    if view_mode.show_joint_reaction and output.equilibrium is not None:
        readout["joint_force"] = f"F-joint = {output.equilibrium.joint_reaction_magnitude:.0f} N"

    return readout


def mode_explanation(mode):
    """Short teaching note for the selected exercise"""
    if mode is MuscleMode.BICEPS:
        return ("BICEPS CURL: weight pulls DOWN, biceps pulls UP (elbow flexion). "
                "Weight + arm weight both pull DOWN, so their torques add together.")
    return ("TRICEPS PULLDOWN: cable pulls UP, triceps extends the elbow. "
            "Cable pulls UP and arm weight pulls DOWN, so their torques oppose each other.")


def solutions_to_dataframe(outputs):
    """
    Flatten engine outputs into a per-frame table for export

    Args:
        outputs: Iterable of EngineOutput (None entries are skipped)

    Returns:
        pandas.DataFrame: One row per solved tick
    """
    rows = []
    for out in outputs:
        if out is None:
            continue
        t = out.torque
        row = {
            "time_s": out.timestamp,
            "mode": t.mode.value,
            "elbow_angle_deg": t.elbow_angle,
            "upper_arm_length_m": out.kinematics.upper_arm_length,
            "forearm_length_m": out.kinematics.forearm_length,
            "hand_moment_arm_m": t.hand_moment_arm,
            "forearm_moment_arm_m": t.forearm_moment_arm,
            "muscle_moment_arm_m": t.muscle_moment_arm,
            "resistance_torque_Nm": t.resistance_torque,
            "forearm_torque_Nm": t.forearm_torque,
            "total_load_torque_Nm": t.total_load_torque,
            "muscle_force_N": t.required_muscle_force,
            "mechanical_advantage": t.mechanical_advantage,
        }
        if out.equilibrium is not None:
            row["joint_force_N"] = out.equilibrium.joint_reaction_magnitude
        rows.append(row)
    return pd.DataFrame(rows)
