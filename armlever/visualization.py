"""
Visualization functions for arm lever physics
"""
import plotly.graph_objects as go
import numpy as np

from .data_panel import ViewMode
from .muscle_mode import DOWN, MuscleMode

# Arrow length per Newton; muscle and joint forces are an order of magnitude larger
WEIGHT_FORCE_SCALE = 0.005
MUSCLE_FORCE_SCALE = 0.0005
# Torque axis arrow length per N·m, and the range it is clamped to (m)
TORQUE_VECTOR_SCALE = 0.02
TORQUE_VECTOR_LENGTH = (0.05, 0.4)

FORCE_COLORS = {
    "weight": "red",
    "cable": "blue",
    "forearm_weight": "gold",
    "biceps": "green",
    "triceps": "#b34dff",
    "joint_reaction": "gray",
    "moment_arm": "cyan",
    "torque": "orange",
}


def _arrow_traces(origin, direction, magnitude, scale, color, name):
    """Shaft line plus cone head for one force arrow"""
    direction = np.asarray(direction, dtype=float)
    if magnitude <= 0 or not direction.any():
        return []
    length = magnitude * scale
    end = origin + direction * length

    shaft = go.Scatter3d(
        x=[origin[0], end[0]],
        y=[origin[1], end[1]],
        z=[origin[2], end[2]],
        mode='lines',
        name=name,
        line=dict(color=color, width=6)
    )
    head = go.Cone(
        x=[end[0]], y=[end[1]], z=[end[2]],
        u=[direction[0]], v=[direction[1]], w=[direction[2]],
        sizemode='absolute',
        sizeref=0.02,
        anchor='tip',
        showscale=False,
        colorscale=[[0, color], [1, color]],
        name=name,
        hoverinfo='skip'
    )
    return [shaft, head]


def create_force_diagram(output, view_mode=ViewMode.BASIC):
    """
    Create a 3D free-body diagram of the forearm

    Args:
        output: EngineOutput for a solved tick
        view_mode: ViewMode deciding whether moment arms and the torque axis are drawn

    Returns:
        plotly.graph_objects.Figure: Arm segments, force arrows and moment arms
    """
    torque = output.torque
    shoulder, elbow, hand = output.shoulder, output.elbow, output.hand
    forearm_center = output.forearm_center
    biceps = torque.mode is MuscleMode.BICEPS

    fig = go.Figure()

    # Arm segments
    fig.add_trace(go.Scatter3d(
        x=[shoulder[0], elbow[0], hand[0]],
        y=[shoulder[1], elbow[1], hand[1]],
        z=[shoulder[2], elbow[2], hand[2]],
        mode='lines+markers',
        name='Arm',
        line=dict(color='darkblue', width=8),
        marker=dict(size=5, color='darkblue')
    ))

    traces = []
    traces += _arrow_traces(
        hand, torque.resistance_direction, torque.resistance_force, WEIGHT_FORCE_SCALE,
        FORCE_COLORS["weight" if biceps else "cable"],
        "Weight" if biceps else "Cable"
    )
    traces += _arrow_traces(
        forearm_center, DOWN, torque.forearm_weight_force, WEIGHT_FORCE_SCALE,
        FORCE_COLORS["forearm_weight"], "Arm weight"
    )
    traces += _arrow_traces(
        torque.muscle_insertion_point, torque.muscle_force_direction,
        torque.required_muscle_force, MUSCLE_FORCE_SCALE,
        FORCE_COLORS["biceps" if biceps else "triceps"],
        "Biceps" if biceps else "Triceps"
    )
    if output.equilibrium is not None:
        traces += _arrow_traces(
            elbow, output.equilibrium.joint_reaction_direction,
            output.equilibrium.joint_reaction_magnitude, MUSCLE_FORCE_SCALE,
            FORCE_COLORS["joint_reaction"], "Joint reaction"
        )

    if view_mode.show_torque_vector and torque.total_load_torque > 0:
        length = float(np.clip(torque.total_load_torque * TORQUE_VECTOR_SCALE, *TORQUE_VECTOR_LENGTH))
        traces += _arrow_traces(
            elbow, torque.torque_axis, length, 1.0, FORCE_COLORS["torque"], "Torque"
        )

    # Moment arms of the vertical loads lie in the elbow's horizontal plane
    if view_mode.show_moment_arms:
        for point, name in ((hand, "r-hand"), (forearm_center, "r-arm")):
            projection = np.array([point[0], elbow[1], point[2]])
            traces.append(go.Scatter3d(
                x=[elbow[0], projection[0]],
                y=[elbow[1], projection[1]],
                z=[elbow[2], projection[2]],
                mode='lines',
                name=name,
                line=dict(color=FORCE_COLORS["moment_arm"], width=3, dash='dash')
            ))

    for trace in traces:
        fig.add_trace(trace)

    fig.update_layout(
        title={
            'text': f"{torque.mode.name.title()} - Free Body Diagram",
            'x': 0.5,
            'xanchor': 'center'
        },
        scene=dict(
            xaxis_title="X (m)",
            yaxis_title="Y (m, up)",
            zaxis_title="Z (m)",
            aspectmode='data',
            camera=dict(
                up=dict(x=0, y=1, z=0),
                eye=dict(x=0.0, y=0.3, z=2.0)
            )
        ),
        height=450,
        showlegend=True
    )

    return fig


def create_torque_plot(timestamps, torques, muscle_forces):
    """
    Create load torque and muscle force time series

    Args:
        timestamps: Time points in seconds
        torques: Total load torque at each time point (N·m)
        muscle_forces: Required muscle force at each time point (N)

    Returns:
        plotly.graph_objects.Figure: Dual-axis plot
    """
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=timestamps,
        y=torques,
        mode='lines',
        name='Load torque',
        line=dict(color='#f1c40f', width=2)
    ))

    fig.add_trace(go.Scatter(
        x=timestamps,
        y=muscle_forces,
        mode='lines',
        name='Muscle force',
        line=dict(color='#27ae60', width=2, dash='dot'),
        yaxis='y2'
    ))

    fig.update_layout(
        title={
            'text': "Elbow Torque and Muscle Force",
            'x': 0.5,
            'xanchor': 'center'
        },
        xaxis_title="Time (seconds)",
        yaxis_title="Torque (N·m)",
        yaxis2=dict(
            title="Muscle force (N)",
            overlaying='y',
            side='right',
            showgrid=False
        ),
        height=350,
        legend=dict(
            yanchor="top",
            y=0.99,
            xanchor="left",
            x=0.01
        ),
        hovermode='x unified',
        plot_bgcolor='rgba(240, 240, 240, 0.5)',
        paper_bgcolor='white',
        font=dict(size=12)
    )

    fig.update_xaxes(showgrid=True, gridwidth=1, gridcolor='lightgray')
    fig.update_yaxes(showgrid=True, gridwidth=1, gridcolor='lightgray')

    return fig


def create_mechanical_advantage_gauge(value):
    """
    Create a gauge chart for the mechanical advantage of the elbow lever

    Values below 1 mean the muscle pulls harder than the load.
    """
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        title={'text': "Mechanical Advantage"},
        domain={'x': [0, 1], 'y': [0, 1]},
        gauge={
            'axis': {'range': [0, 1.5], 'tickwidth': 1},
            'bar': {'color': "darkblue"},
            'steps': [
                {'range': [0, 0.25], 'color': "red"},
                {'range': [0.25, 0.5], 'color': "orange"},
                {'range': [0.5, 1.0], 'color': "yellow"},
                {'range': [1.0, 1.5], 'color': "lightgreen"}
            ],
            'threshold': {
                'line': {'color': "black", 'width': 4},
                'thickness': 0.75,
                'value': 1.0
            }
        }
    ))

    fig.update_layout(
        height=250,
        font={'size': 14}
    )

    return fig


def create_3d_trajectory(positions):
    """
    Create 3D trajectory visualization of the hand

    Args:
        positions: Array of 3D positions over time

    Returns:
        plotly.graph_objects.Figure: 3D trajectory plot
    """
    positions = np.asarray(positions, dtype=float)
    fig = go.Figure(data=[go.Scatter3d(
        x=positions[:, 0],
        y=positions[:, 1],
        z=positions[:, 2],
        mode='lines+markers',
        marker=dict(
            size=3,
            color=np.arange(len(positions)),
            colorscale='Viridis',
            showscale=True,
            colorbar=dict(title="Frame")
        ),
        line=dict(
            color='darkblue',
            width=2
        )
    )])

    fig.update_layout(
        title="Hand Trajectory",
        scene=dict(
            xaxis_title="X (m)",
            yaxis_title="Y (m, up)",
            zaxis_title="Z (m)",
            camera=dict(
                eye=dict(x=1.5, y=1.5, z=1.5)
            )
        ),
        height=400
    )

    return fig
