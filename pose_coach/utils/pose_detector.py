"""
Pose Detector Module
====================

MediaPipe pose detection and the OpenCV overlay drawn on processed frames.
"""

import logging
from typing import List, Mapping, Optional, Sequence

import cv2
import numpy as np

from ..analyzers.angles import JointAngle
from ..analyzers.landmarks import PoseLandmark, SKELETON_CONNECTIONS, is_valid, landmarks_from_mediapipe
from ..analyzers.models import FeedbackResult, Landmark
from ..config import DetectorConfig, get_detector_config

logger = logging.getLogger(__name__)

GOOD_COLOR = (111, 170, 33)     # green (BGR)
WARN_COLOR = (71, 179, 255)     # amber (BGR)
REPS_COLOR = (251, 218, 97)

# Where each angle label is drawn, with a pixel offset from the joint
_ANGLE_LABELS = (
    (JointAngle.LEFT_ELBOW, PoseLandmark.LEFT_ELBOW, (10, -10)),
    (JointAngle.RIGHT_ELBOW, PoseLandmark.RIGHT_ELBOW, (-50, -10)),
    (JointAngle.LEFT_KNEE, PoseLandmark.LEFT_KNEE, (10, 0)),
    (JointAngle.RIGHT_KNEE, PoseLandmark.RIGHT_KNEE, (-50, 0)),
)


class PoseDetector:
    """
    Single-person MediaPipe pose detector.

    MediaPipe is imported and its graph created on first use, so the
    server starts without loading the model.
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        """
        Initialize the detector.

        Args:
            config: Detector settings, read from the environment if omitted
        """
        self.config = config or get_detector_config()
        self._pose = None

    def _init_pose_detection(self) -> None:
        """Initialize MediaPipe pose detection."""
        import mediapipe as mp
        self._pose = mp.solutions.pose.Pose(
            model_complexity=self.config.model_complexity,
            min_detection_confidence=self.config.min_detection_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )
        logger.info("MediaPipe pose model loaded (complexity=%d)", self.config.model_complexity)

    def detect(self, frame: np.ndarray) -> Optional[List[Landmark]]:
        """
        Detect pose landmarks in a BGR frame.

        Returns:
            33 landmarks, or None if no person was found
        """
        if self._pose is None:
            self._init_pose_detection()
        image = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image.flags.writeable = False
        results = self._pose.process(image)
        return landmarks_from_mediapipe(results.pose_landmarks)

    def close(self) -> None:
        """Release the MediaPipe graph."""
        if self._pose is not None:
            self._pose.close()
            self._pose = None


def _to_pixels(landmark: Landmark, width: int, height: int):
    return int(landmark.x * width), int(landmark.y * height)


def draw_overlay(
    image: np.ndarray,
    landmarks: Optional[Sequence[Optional[Landmark]]],
    angles: Mapping[JointAngle, int],
    result: Optional[FeedbackResult],
    exercise: str,
    reps: Optional[int] = None,
    stage: Optional[str] = None,
) -> np.ndarray:
    """
    Draw skeleton, angle labels, counters and feedback onto a BGR image.

    Only landmarks above the visibility threshold are drawn.
    """
    frame_h, frame_w = image.shape[:2]

    if landmarks:
        for start, end in SKELETON_CONNECTIONS:
            if is_valid(landmarks, start) and is_valid(landmarks, end):
                cv2.line(image, _to_pixels(landmarks[start], frame_w, frame_h),
                         _to_pixels(landmarks[end], frame_w, frame_h), (0, 255, 0), 3)
        for index in range(len(landmarks)):
            if is_valid(landmarks, index):
                cv2.circle(image, _to_pixels(landmarks[index], frame_w, frame_h), 5, (0, 0, 255), -1)

        for name, joint, (dx, dy) in _ANGLE_LABELS:
            if name in angles and is_valid(landmarks, joint):
                x, y = _to_pixels(landmarks[joint], frame_w, frame_h)
                text = f"{angles[name]} deg"
                cv2.putText(image, text, (x + dx, y + dy), cv2.FONT_HERSHEY_SIMPLEX,
                            0.5, (0, 0, 0), 3, cv2.LINE_AA)
                cv2.putText(image, text, (x + dx, y + dy), cv2.FONT_HERSHEY_SIMPLEX,
                            0.5, (255, 255, 255), 1, cv2.LINE_AA)

    # Header bar
    cv2.rectangle(image, (0, 0), (350, 73), (245, 117, 16), -1)
    cv2.putText(image, exercise.upper(), (15, 12),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1, cv2.LINE_AA)
    if reps is not None:
        cv2.putText(image, str(reps), (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 2, REPS_COLOR, 2, cv2.LINE_AA)
    if stage is not None:
        cv2.putText(image, "STAGE", (200, 12),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1, cv2.LINE_AA)
        cv2.putText(image, stage.upper(), (195, 55),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (255, 255, 255), 2, cv2.LINE_AA)

    # Feedback bar
    if result is not None:
        color = GOOD_COLOR if result.good_form else WARN_COLOR
        cv2.rectangle(image, (0, frame_h - 60), (frame_w, frame_h), (0, 0, 0), -1)
        cv2.putText(image, result.message, (20, frame_h - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2, cv2.LINE_AA)

    return image
