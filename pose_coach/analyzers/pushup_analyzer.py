"""
Push-up Analyzer Module
=======================

Push-up form feedback and rep counting from pose landmarks.

Usage:
    state = RepState()
    result = evaluate_pushup(landmarks, angles, state)
    print(result.message, state.reps)
"""

from typing import Mapping, Optional, Sequence

from ..config import AnalyzerConfig
from .angles import JointAngle
from .geometry import alignment_deviation
from .landmarks import body_line
from .models import FeedbackResult, Landmark
from .rep_counter import advance_rep_state
from .session import RepState

SUCCESS_MESSAGE = "Great push-up!"
NOTE_BODY_STRAIGHT = "Keep body straight (no sagging)."
NOTE_GO_LOWER = "Go lower (elbows below 90 degrees at the bottom)."


def evaluate_pushup(
    landmarks: Sequence[Optional[Landmark]],
    angles: Mapping[JointAngle, int],
    state: RepState,
    config: Optional[AnalyzerConfig] = None,
) -> FeedbackResult:
    """
    Check push-up technique and advance the rep counter.

    Reps are driven by the left elbow only; the right elbow only takes part
    in the depth check.

    Args:
        landmarks: Frame landmarks
        angles: Merged joint angles including this frame
        state: Push-up rep state, updated in place
        config: Analyzer thresholds

    Returns:
        Feedback for this frame
    """
    config = config or AnalyzerConfig()
    left_elbow = angles.get(JointAngle.LEFT_ELBOW)
    right_elbow = angles.get(JointAngle.RIGHT_ELBOW)
    notes = []

    line = body_line(landmarks)
    if line is not None and alignment_deviation(*line) > config.alignment_tolerance:
        notes.append(NOTE_BODY_STRAIGHT)

    if (left_elbow is not None and right_elbow is not None
            and left_elbow > config.pushup_depth_angle
            and right_elbow > config.pushup_depth_angle):
        notes.append(NOTE_GO_LOWER)

    advance_rep_state(
        state,
        left_elbow,
        up_threshold=config.pushup_up_angle,
        down_threshold=config.pushup_down_angle,
        debounce_frames=config.debounce_frames,
    )
    return FeedbackResult.from_notes(notes, SUCCESS_MESSAGE)
