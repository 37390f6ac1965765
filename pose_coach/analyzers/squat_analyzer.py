"""
Squat Analyzer Module
=====================

Squat form feedback and rep counting from pose landmarks.

Checks:
    - knees tracking over the ankles on each side
    - knee angle inside the target depth band
    - torso angle (shoulder-hip-ankle) inside the target band

Usage:
    state = RepState()
    result = evaluate_squat(landmarks, angles, state)
"""

from typing import Mapping, Optional, Sequence

from ..config import AnalyzerConfig
from .angles import JointAngle
from .geometry import angle_at
from .landmarks import PoseLandmark, all_valid, body_line
from .models import FeedbackResult, Landmark
from .rep_counter import advance_rep_state
from .session import RepState

SUCCESS_MESSAGE = "Good squat!"
NOTE_KNEES_OVER_TOES = "Keep knees over toes."
NOTE_GO_DEEPER = "Go deeper (hips below knees)."
NOTE_TOO_OPEN = "Squat deeper (knee angle too open)."
NOTE_CHEST_UP = "Keep chest up, neutral spine."

_KNEE_ANKLE_PAIRS = (
    (PoseLandmark.LEFT_KNEE, PoseLandmark.LEFT_ANKLE),
    (PoseLandmark.RIGHT_KNEE, PoseLandmark.RIGHT_ANKLE),
)


def _known(*values):
    return [value for value in values if value is not None]


def evaluate_squat(
    landmarks: Sequence[Optional[Landmark]],
    angles: Mapping[JointAngle, int],
    state: RepState,
    config: Optional[AnalyzerConfig] = None,
) -> FeedbackResult:
    """
    Check squat technique and advance the rep counter.

    Both depth bounds are checked independently, so a frame can report
    "go deeper" and "too open" together when the knees disagree.

    Args:
        landmarks: Frame landmarks
        angles: Merged joint angles including this frame
        state: Squat rep state, updated in place
        config: Analyzer thresholds

    Returns:
        Feedback for this frame
    """
    config = config or AnalyzerConfig()
    left_knee = angles.get(JointAngle.LEFT_KNEE)
    right_knee = angles.get(JointAngle.RIGHT_KNEE)
    knees = _known(left_knee, right_knee)
    notes = []

    for knee_idx, ankle_idx in _KNEE_ANKLE_PAIRS:
        if not all_valid(landmarks, (knee_idx, ankle_idx)):
            continue
        if abs(landmarks[knee_idx].x - landmarks[ankle_idx].x) > config.knee_over_toe_tolerance:
            notes.append(NOTE_KNEES_OVER_TOES)

    if any(knee < config.squat_min_knee_angle for knee in knees):
        notes.append(NOTE_GO_DEEPER)
    if any(knee > config.squat_max_knee_angle for knee in knees):
        notes.append(NOTE_TOO_OPEN)

    line = body_line(landmarks)
    if line is not None:
        torso_angle = angle_at(*line)
        if torso_angle < config.torso_min_angle or torso_angle > config.torso_max_angle:
            notes.append(NOTE_CHEST_UP)

    advance_rep_state(
        state,
        left_knee,
        up_threshold=config.squat_up_angle,
        down_threshold=config.squat_down_angle,
        debounce_frames=config.debounce_frames,
    )
    return FeedbackResult.from_notes(notes, SUCCESS_MESSAGE)
