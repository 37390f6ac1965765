"""
Landmark Validation
===================

MediaPipe pose landmark indices and the visibility gate applied before any
landmark is used for angles, technique checks or drawing.
"""

import math
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

from .geometry import midpoint
from .models import Landmark, Point

# Minimum visibility for a landmark to be trusted
VISIBILITY_THRESHOLD = 0.5


class PoseLandmark(IntEnum):
    """Indices of the 33 MediaPipe pose landmarks used by the coach."""
    NOSE = 0
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28


NUM_LANDMARKS = 33

# Shoulders, hips and ankles on both sides: the body line
BODY_LINE = (
    PoseLandmark.LEFT_SHOULDER,
    PoseLandmark.RIGHT_SHOULDER,
    PoseLandmark.LEFT_HIP,
    PoseLandmark.RIGHT_HIP,
    PoseLandmark.LEFT_ANKLE,
    PoseLandmark.RIGHT_ANKLE,
)

SKELETON_CONNECTIONS = (
    (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_ELBOW),
    (PoseLandmark.LEFT_ELBOW, PoseLandmark.LEFT_WRIST),
    (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_ELBOW),
    (PoseLandmark.RIGHT_ELBOW, PoseLandmark.RIGHT_WRIST),
    (PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER),
    (PoseLandmark.LEFT_HIP, PoseLandmark.LEFT_KNEE),
    (PoseLandmark.LEFT_KNEE, PoseLandmark.LEFT_ANKLE),
    (PoseLandmark.RIGHT_HIP, PoseLandmark.RIGHT_KNEE),
    (PoseLandmark.RIGHT_KNEE, PoseLandmark.RIGHT_ANKLE),
    (PoseLandmark.LEFT_HIP, PoseLandmark.RIGHT_HIP),
    (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_HIP),
    (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_HIP),
)


def get_landmark(landmarks: Sequence[Optional[Landmark]], index: int) -> Optional[Landmark]:
    """Return the landmark at ``index``, or None if the sequence has no such entry."""
    if landmarks is None or index < 0 or index >= len(landmarks):
        return None
    return landmarks[index]


def is_valid(landmarks: Sequence[Optional[Landmark]], index: int) -> bool:
    """Check that a landmark exists, has finite coordinates and is visible enough to use."""
    landmark = get_landmark(landmarks, index)
    if landmark is None or not (math.isfinite(landmark.x) and math.isfinite(landmark.y)):
        return False
    return landmark.visibility > VISIBILITY_THRESHOLD


def all_valid(landmarks: Sequence[Optional[Landmark]], indices: Iterable[int]) -> bool:
    """Check that every listed landmark exists and is visible enough to use."""
    return all(is_valid(landmarks, index) for index in indices)


def body_line(landmarks: Sequence[Optional[Landmark]]) -> Optional[Tuple[Point, Point, Point]]:
    """
    Shoulder, hip and ankle midpoints, or None if any of the six is unusable.
    """
    if not all_valid(landmarks, BODY_LINE):
        return None
    return (
        midpoint(landmarks[PoseLandmark.LEFT_SHOULDER], landmarks[PoseLandmark.RIGHT_SHOULDER]),
        midpoint(landmarks[PoseLandmark.LEFT_HIP], landmarks[PoseLandmark.RIGHT_HIP]),
        midpoint(landmarks[PoseLandmark.LEFT_ANKLE], landmarks[PoseLandmark.RIGHT_ANKLE]),
    )


def landmarks_from_mediapipe(pose_landmarks) -> Optional[List[Landmark]]:
    """
    Convert a MediaPipe ``pose_landmarks`` result into Landmark objects.

    Args:
        pose_landmarks: ``results.pose_landmarks`` from MediaPipe Pose, or None

    Returns:
        Ordered list of 33 landmarks, or None if no pose was detected
    """
    if not pose_landmarks:
        return None
    return [
        Landmark(x=lm.x, y=lm.y, visibility=lm.visibility)
        for lm in pose_landmarks.landmark
    ]
