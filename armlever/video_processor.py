"""
Video landmark extraction using MediaPipe Pose
Supplies one TrackingFrame per video frame to the arm engine
"""
import logging

import cv2
import numpy as np

from .landmarks import LandmarkSample, TrackingFrame

logger = logging.getLogger(__name__)

# MediaPipe Pose landmark indices per body side
ARM_LANDMARK_INDICES = {
    "left": {"shoulder": 11, "elbow": 13, "hand": 15},
    "right": {"shoulder": 12, "elbow": 14, "hand": 16},
}


class VideoProcessingError(RuntimeError):
    """Raised when a video cannot be read"""


def to_engine_frame(x, y, z):
    """
    Convert a MediaPipe world coordinate to the engine's frame

    MediaPipe world landmarks are in meters with y pointing down and z
    toward the camera; the engine expects y up. Flipping y and z is a
    rotation, so handedness is preserved.
    """
    return np.array([x, -y, -z], dtype=float)


def frame_from_world_landmarks(world_landmarks, side="right", visibility_threshold=0.5, timestamp=0.0):
    """
    Build a TrackingFrame from one set of MediaPipe world landmarks

    Args:
        world_landmarks: Sequence of landmarks with x, y, z, visibility, or None
        side: Which arm to track ('left' or 'right')
        visibility_threshold: Minimum visibility to count as tracked
        timestamp: Frame time in seconds

    Returns:
        TrackingFrame: Untracked samples where the landmark is missing or hidden
    """
    if side not in ARM_LANDMARK_INDICES:
        raise ValueError(f"side must be 'left' or 'right', got {side!r}")

    samples = {}
    for name, idx in ARM_LANDMARK_INDICES[side].items():
        if world_landmarks is None or idx >= len(world_landmarks):
            samples[name] = LandmarkSample()
            continue
        lm = world_landmarks[idx]
        visibility = getattr(lm, "visibility", 1.0)
        samples[name] = LandmarkSample(
            position=to_engine_frame(lm.x, lm.y, lm.z),
            tracked=visibility is not None and visibility >= visibility_threshold
        )

    return TrackingFrame(timestamp=timestamp, **samples)


class VideoProcessor:
    """
    Track shoulder, elbow and hand through a video file
    """

    def __init__(self, side="right", visibility_threshold=0.5, model_complexity=1):
        """
        Initialize video processor with pose model parameters

        Args:
            side: Arm to track ('left' or 'right')
            visibility_threshold: Minimum landmark visibility to count as tracked
            model_complexity: MediaPipe Pose model complexity (0, 1 or 2)
        """
        if side not in ARM_LANDMARK_INDICES:
            raise ValueError(f"side must be 'left' or 'right', got {side!r}")
        self.side = side
        self.visibility_threshold = visibility_threshold
        self.pose_params = dict(
            static_image_mode=False,
            model_complexity=model_complexity,
            enable_segmentation=False,
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5
        )
        self.fps = None
        self.total_frames = 0

    def process_video(self, video_path, progress_bar=None, max_width=640):
        """
        Run pose tracking over a video, yielding one frame of input per image

        Args:
            video_path: Path to video file
            progress_bar: Streamlit progress bar object
            max_width: Frames wider than this are downscaled first

        Yields:
            tuple: (TrackingFrame, RGB image as numpy array)
        """
        import mediapipe as mp

        cap = cv2.VideoCapture(video_path)
        if not cap.isOpened():
            raise VideoProcessingError(f"Could not open video: {video_path}")

        fps = cap.get(cv2.CAP_PROP_FPS)
        if fps == 0 or fps > 240:  # Sanity check
            logger.warning("Implausible FPS %.1f, falling back to 30", fps)
            fps = 30
        self.fps = fps
        self.total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))

        pose = mp.solutions.pose.Pose(**self.pose_params)
        frame_count = 0
        try:
            while True:
                ret, image = cap.read()
                if not ret:
                    break

                height, width = image.shape[:2]
                if width > max_width:
                    scale = max_width / width
                    image = cv2.resize(image, (int(width * scale), int(height * scale)))

                rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
                results = pose.process(rgb)

                world = None
                if results.pose_world_landmarks is not None:
                    world = results.pose_world_landmarks.landmark

                frame = frame_from_world_landmarks(
                    world,
                    side=self.side,
                    visibility_threshold=self.visibility_threshold,
                    timestamp=frame_count / fps
                )
                frame_count += 1

                if progress_bar is not None and self.total_frames > 0:
                    progress_bar.progress(min(frame_count / self.total_frames, 1.0))

                yield frame, rgb
        finally:
            cap.release()
            pose.close()
            logger.info("Processed %d frames from %s", frame_count, video_path)
