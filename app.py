import os
import tempfile

import streamlit as st
import numpy as np
import matplotlib.pyplot as plt

from armlever import (
    ArmConfiguration,
    ArmLeverEngine,
    ConfigurationError,
    MuscleMode,
    ViewMode,
    format_readout,
    mode_explanation,
    solutions_to_dataframe,
)
from armlever.logging_config import setup_logging
from armlever.video_processor import VideoProcessor, VideoProcessingError
from armlever.visualization import (
    create_3d_trajectory,
    create_force_diagram,
    create_mechanical_advantage_gauge,
    create_torque_plot,
)

setup_logging()

st.set_page_config(page_title="Arm Lever: Torque & Muscle Force", layout="wide")

st.title("Arm Lever Tracker → Elbow Torque & Muscle Force")
st.caption("Upload a video of an arm exercise. We track shoulder, elbow and hand, "
           "then solve the elbow torque balance for every frame.")

with st.expander("Method (concise) & assumptions"):
    st.markdown("""
**Tracking:** MediaPipe Pose world landmarks (meters) for the shoulder, elbow and wrist of one arm.
A landmark counts as tracked when its visibility passes the threshold; frames with a missing
landmark produce no solution.

**Smoothing:** Each landmark is filtered with \\(p \\leftarrow p + (1-\\alpha)(raw - p)\\), seeded
with its first tracked sample.

**Moment arms:** Weight and cable forces are vertical, so their moment arms are the horizontal
distance from the elbow. The muscle moment arm is \\(|r \\times \\hat{F}|\\) for the insertion
offset \\(r\\).

**Balance:** Curl: τ = τ_weight + τ_arm. Pulldown: τ = |τ_cable − τ_arm|.
Muscle force = τ / r_muscle (0 when r_muscle < 1 mm). Joint reaction closes ΣF = 0.
""")

st.sidebar.header("Inputs")
mass_text = st.sidebar.text_input("Hand load (kg)", value="5.0")
mode_name = st.sidebar.radio("Exercise", [m.value for m in MuscleMode],
                             format_func=lambda v: "Biceps curl" if v == "biceps" else "Triceps pulldown")
view_mode = st.sidebar.selectbox("View", list(ViewMode), format_func=lambda v: v.value)
side = st.sidebar.radio("Tracked arm", ["right", "left"])

st.sidebar.header("Arm model")
forearm_mass = st.sidebar.number_input("Forearm mass (kg)", min_value=0.0, max_value=5.0, value=0.10, step=0.05)
bicep_cm = st.sidebar.number_input("Biceps insertion (cm)", min_value=0.5, max_value=15.0, value=5.0, step=0.5)
tricep_cm = st.sidebar.number_input("Triceps insertion (cm)", min_value=0.5, max_value=10.0, value=2.5, step=0.5)
smoothing = st.sidebar.slider("Smoothing factor", 0.05, 0.95, 0.3)

try:
    config = ArmConfiguration(
        forearm_mass=forearm_mass,
        bicep_insertion_distance=bicep_cm / 100.0,
        tricep_insertion_distance=tricep_cm / 100.0,
        smoothing_factor=smoothing,
    )
except ConfigurationError as e:
    st.error(f"Invalid arm model: {e}")
    st.stop()

# Streamlit reruns the script on every edit; the last accepted load survives in session state
if "hand_load_mass" not in st.session_state:
    st.session_state["hand_load_mass"] = 0.0

engine = ArmLeverEngine(config.with_hand_load(st.session_state["hand_load_mass"]), mode=MuscleMode(mode_name))
if engine.set_hand_load_text(mass_text):
    st.session_state["hand_load_mass"] = engine.config.hand_load_mass
else:
    st.sidebar.warning(f"Invalid weight input '{mass_text}', using {engine.config.hand_load_mass:.1f} kg")

st.info(mode_explanation(engine.mode))

uploaded = st.file_uploader("Upload a video (mp4, mov, avi, mkv)", type=["mp4", "mov", "avi", "mkv"])

if uploaded is not None:
    # Save to a temp file for OpenCV
    tfile = tempfile.NamedTemporaryFile(delete=False, suffix=os.path.splitext(uploaded.name)[1])
    tfile.write(uploaded.read())
    tfile.flush()
    video_path = tfile.name

    st.video(uploaded)

    processor = VideoProcessor(side=side)
    progress = st.progress(0.0)

    outputs = []
    tracked_frames = 0
    last_output = None
    last_image = None
    try:
        for frame, rgb in processor.process_video(video_path, progress_bar=progress):
            output = engine.tick(frame, include_joint_reaction=view_mode.show_joint_reaction)
            outputs.append(output)
            if output is not None:
                tracked_frames += 1
                last_output = output
                last_image = rgb
    except VideoProcessingError as e:
        st.error(str(e))
        st.stop()

    if last_output is None:
        st.error("Arm not tracked. Try a clearer video (one person, whole arm visible, good light).")
        st.stop()

    df = solutions_to_dataframe(outputs)

    st.subheader("Results")
    c1, c2, c3 = st.columns(3)
    c1.metric("Frames", f"{len(outputs)}")
    c2.metric("Frames solved", f"{tracked_frames}")
    c3.metric("Peak muscle force (N)", f"{df['muscle_force_N'].max():.0f}")

    st.subheader("Physics data (last solved frame)")
    readout = format_readout(last_output, view_mode)
    cols = st.columns(3)
    for i, text in enumerate(readout.values()):
        cols[i % 3].markdown(f"**{text}**")

    c1, c2 = st.columns([2, 1])
    c1.plotly_chart(create_force_diagram(last_output, view_mode), use_container_width=True)
    c2.plotly_chart(create_mechanical_advantage_gauge(last_output.torque.mechanical_advantage),
                    use_container_width=True)
    if last_image is not None:
        c2.image(last_image, caption="Last solved frame")

    st.plotly_chart(create_torque_plot(df["time_s"], df["total_load_torque_Nm"], df["muscle_force_N"]),
                    use_container_width=True)

    hand_path = np.array([out.hand for out in outputs if out is not None])
    st.plotly_chart(create_3d_trajectory(hand_path), use_container_width=True)

    st.subheader("Elbow angle over time")
    fig = plt.figure()
    plt.plot(df["time_s"], df["elbow_angle_deg"])
    plt.xlabel("Time (s)")
    plt.ylabel("Elbow angle (°)")
    plt.title("Elbow angle from tracked landmarks")
    st.pyplot(fig)

    st.download_button("Download per‑frame CSV", data=df.to_csv(index=False),
                       file_name="per_frame_physics.csv", mime="text/csv")

else:
    st.info("Upload a video to begin. For best results: single person, the whole arm visible, good lighting, stable camera.")
