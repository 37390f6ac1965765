"""
Angle Extraction
================

Joint angles computed from fixed landmark triples. Angles persist between
frames: a joint that cannot be measured this frame keeps its last value.
"""

from enum import Enum
from typing import Dict, Mapping, Optional, Sequence

from .geometry import angle_at
from .landmarks import PoseLandmark, all_valid
from .models import Landmark


class JointAngle(str, Enum):
    """The closed set of measured joint angles."""
    LEFT_ELBOW = "leftElbow"
    RIGHT_ELBOW = "rightElbow"
    LEFT_KNEE = "leftKnee"
    RIGHT_KNEE = "rightKnee"
    LEFT_SHOULDER = "leftShoulder"
    RIGHT_SHOULDER = "rightShoulder"


AngleMap = Dict[JointAngle, int]

# (first point, vertex, last point) for each angle
JOINT_TRIPLES = {
    JointAngle.LEFT_ELBOW: (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_ELBOW, PoseLandmark.LEFT_WRIST),
    JointAngle.RIGHT_ELBOW: (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_ELBOW, PoseLandmark.RIGHT_WRIST),
    JointAngle.LEFT_KNEE: (PoseLandmark.LEFT_HIP, PoseLandmark.LEFT_KNEE, PoseLandmark.LEFT_ANKLE),
    JointAngle.RIGHT_KNEE: (PoseLandmark.RIGHT_HIP, PoseLandmark.RIGHT_KNEE, PoseLandmark.RIGHT_ANKLE),
    JointAngle.LEFT_SHOULDER: (PoseLandmark.LEFT_ELBOW, PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_HIP),
    JointAngle.RIGHT_SHOULDER: (PoseLandmark.RIGHT_ELBOW, PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_HIP),
}


def compute_angles(landmarks: Optional[Sequence[Optional[Landmark]]]) -> AngleMap:
    """
    Measure every angle whose three landmarks are valid in this frame.

    Returns:
        Only the angles computed now; empty if none could be measured
    """
    if not landmarks:
        return {}
    angles = {}
    for name, (a, b, c) in JOINT_TRIPLES.items():
        if all_valid(landmarks, (a, b, c)):
            angles[name] = angle_at(landmarks[a], landmarks[b], landmarks[c])
    return angles


def extract_angles(
    landmarks: Optional[Sequence[Optional[Landmark]]],
    previous: Optional[Mapping[JointAngle, int]] = None,
) -> AngleMap:
    """
    Merge this frame's angles into the previously known ones.

    Args:
        landmarks: Frame landmarks, or None when no pose was detected
        previous: Angles known before this frame (not modified)

    Returns:
        New angle map; keys not measured this frame keep their old value
    """
    merged = dict(previous or {})
    merged.update(compute_angles(landmarks))
    return merged


def angles_to_dict(angles: Mapping[JointAngle, int]) -> Dict[str, int]:
    """Angle map keyed by plain strings, for JSON responses."""
    return {JointAngle(name).value: int(value) for name, value in angles.items()}
