"""
Exercise Analyzers Module
=========================

Geometry, landmark validation, angle extraction and the per-exercise
form analyzers with their rep state machines.
"""

from .angles import AngleMap, JointAngle, JOINT_TRIPLES, angles_to_dict, compute_angles, extract_angles
from .evaluator import evaluate, process_pose
from .geometry import alignment_deviation, angle_at, distance, midpoint
from .landmarks import VISIBILITY_THRESHOLD, PoseLandmark, all_valid, is_valid, landmarks_from_mediapipe
from .models import Exercise, FeedbackResult, Landmark, Point
from .plank_analyzer import evaluate_plank
from .pushup_analyzer import evaluate_pushup
from .session import RepPhase, RepState, SessionState, reset_session
from .squat_analyzer import evaluate_squat

__all__ = [
    "AngleMap",
    "JointAngle",
    "JOINT_TRIPLES",
    "angles_to_dict",
    "compute_angles",
    "extract_angles",
    "evaluate",
    "process_pose",
    "alignment_deviation",
    "angle_at",
    "distance",
    "midpoint",
    "VISIBILITY_THRESHOLD",
    "PoseLandmark",
    "all_valid",
    "is_valid",
    "landmarks_from_mediapipe",
    "Exercise",
    "FeedbackResult",
    "Landmark",
    "Point",
    "evaluate_plank",
    "evaluate_pushup",
    "RepPhase",
    "RepState",
    "SessionState",
    "reset_session",
    "evaluate_squat",
]
