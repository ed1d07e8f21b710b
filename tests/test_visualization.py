"""
Smoke tests for the plotly figures.
"""

import numpy as np
import pytest

from armlever.config import ArmConfiguration
from armlever.engine import ArmLeverEngine
from armlever.data_panel import ViewMode
from armlever.landmarks import TrackingFrame
from armlever.visualization import (
    TORQUE_VECTOR_LENGTH,
    TORQUE_VECTOR_SCALE,
    create_3d_trajectory,
    create_force_diagram,
    create_mechanical_advantage_gauge,
    create_torque_plot,
)

CURL = dict(shoulder=[0.0, 0.5, 0.0], elbow=[0.0, 0.0, 0.0], hand=[0.3, 0.0, 0.0])


def solved_output(include_joint_reaction):
    engine = ArmLeverEngine(ArmConfiguration(forearm_mass=2.0, hand_load_mass=5.0))
    return engine.tick(TrackingFrame.from_positions(**CURL), include_joint_reaction=include_joint_reaction)


class TestForceDiagram:

    def test_joint_reaction_arrow_only_when_solved(self):
        without = create_force_diagram(solved_output(False), ViewMode.ADVANCED)
        with_reaction = create_force_diagram(solved_output(True), ViewMode.ADVANCED)

        names = {trace.name for trace in with_reaction.data}
        assert "Joint reaction" in names
        assert "Joint reaction" not in {trace.name for trace in without.data}
        assert {"Arm", "Weight", "Arm weight", "Biceps", "r-hand", "r-arm"} <= names

    def test_zero_load_draws_no_weight_arrow(self):
        engine = ArmLeverEngine(ArmConfiguration(forearm_mass=2.0, hand_load_mass=0.0))
        output = engine.tick(TrackingFrame.from_positions(**CURL))

        names = {trace.name for trace in create_force_diagram(output).data}
        assert "Weight" not in names

    @pytest.mark.parametrize("view_mode, drawn", [
        (ViewMode.BASIC, False),
        (ViewMode.TORQUE_ANALYSIS, False),
        (ViewMode.ADVANCED, True),
    ])
    def test_torque_axis_only_in_complete_analysis(self, view_mode, drawn):
        fig = create_force_diagram(solved_output(False), view_mode)

        assert ("Torque" in {trace.name for trace in fig.data}) is drawn

    @pytest.mark.parametrize("view_mode, drawn", [
        (ViewMode.BASIC, False),
        (ViewMode.TORQUE_ANALYSIS, True),
        (ViewMode.ADVANCED, True),
    ])
    def test_moment_arms_follow_view_mode(self, view_mode, drawn):
        names = {trace.name for trace in create_force_diagram(solved_output(False), view_mode).data}

        assert ({"r-hand", "r-arm"} <= names) is drawn

    def test_torque_arrow_starts_at_elbow_along_axis(self):
        output = solved_output(False)
        fig = create_force_diagram(output, ViewMode.ADVANCED)
        shaft = next(t for t in fig.data if t.name == "Torque" and t.type == "scatter3d")

        start = np.array([shaft.x[0], shaft.y[0], shaft.z[0]])
        end = np.array([shaft.x[1], shaft.y[1], shaft.z[1]])
        np.testing.assert_allclose(start, output.elbow)
        # 17.658 N·m * 0.02 falls inside the clamp range
        expected_length = output.torque.total_load_torque * TORQUE_VECTOR_SCALE
        np.testing.assert_allclose(end - start, output.torque.torque_axis * expected_length)

    def test_torque_arrow_length_is_clamped(self):
        engine = ArmLeverEngine(ArmConfiguration(forearm_mass=2.0, hand_load_mass=100.0))
        output = engine.tick(TrackingFrame.from_positions(**CURL))
        fig = create_force_diagram(output, ViewMode.ADVANCED)
        shaft = next(t for t in fig.data if t.name == "Torque" and t.type == "scatter3d")

        length = np.linalg.norm([shaft.x[1] - shaft.x[0], shaft.y[1] - shaft.y[0], shaft.z[1] - shaft.z[0]])
        assert length == pytest.approx(TORQUE_VECTOR_LENGTH[1])


def test_torque_plot_has_two_series():
    t = np.linspace(0, 1, 5)
    fig = create_torque_plot(t, t * 10, t * 200)

    assert len(fig.data) == 2


def test_gauge_value():
    fig = create_mechanical_advantage_gauge(0.17)

    assert fig.data[0].value == 0.17


def test_trajectory_points():
    positions = np.array([[0.0, 0.0, 0.0], [0.1, 0.0, 0.0], [0.2, 0.1, 0.0]])
    fig = create_3d_trajectory(positions)

    assert len(fig.data[0].x) == 3
