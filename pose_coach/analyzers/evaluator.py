"""
Exercise Evaluation
===================

Per-frame pipeline: validate landmarks, merge joint angles, then run the
analyzer of the selected exercise against the session state.

Usage:
    session = SessionState()
    for landmarks in frames:
        result = process_pose(session, Exercise.PUSHUP, landmarks)
        if result is not None:
            print(result.message, session.pushup.reps)
"""

import logging
from typing import Mapping, Optional, Sequence, Tuple

from ..config import AnalyzerConfig
from .angles import JointAngle, compute_angles
from .models import Exercise, FeedbackResult, Landmark
from .plank_analyzer import evaluate_plank
from .pushup_analyzer import evaluate_pushup
from .session import SessionState
from .squat_analyzer import evaluate_squat

logger = logging.getLogger(__name__)


def evaluate(
    exercise: Exercise,
    landmarks: Sequence[Optional[Landmark]],
    angles: Mapping[JointAngle, int],
    session: SessionState,
    config: Optional[AnalyzerConfig] = None,
) -> Tuple[FeedbackResult, SessionState]:
    """
    Run one exercise analyzer on a frame.

    Only the rep state of ``exercise`` is touched; the result is also kept
    in ``session.feedback`` as the last known message for that exercise.

    Returns:
        Tuple of (feedback, session)
    """
    exercise = Exercise(exercise)
    state = session.rep_state(exercise)
    phase_before = state.phase

    if exercise == Exercise.PUSHUP:
        result = evaluate_pushup(landmarks, angles, state, config)
    elif exercise == Exercise.SQUAT:
        result = evaluate_squat(landmarks, angles, state, config)
    else:
        result = evaluate_plank(landmarks, config)

    if state.phase != phase_before:
        logger.debug("%s: %s -> %s", exercise.value, phase_before.value, state.phase.value)
    session.feedback[exercise] = result
    return result, session


def process_pose(
    session: SessionState,
    exercise: Exercise,
    landmarks: Optional[Sequence[Optional[Landmark]]],
    config: Optional[AnalyzerConfig] = None,
) -> Optional[FeedbackResult]:
    """
    Process one frame of landmarks for the active exercise.

    Frames with no pose, or where no joint angle can be measured, are
    skipped: the session is left as it was and None is returned.

    Args:
        session: Session state, updated in place
        exercise: Active exercise
        landmarks: Frame landmarks, or None when no pose was detected
        config: Analyzer thresholds

    Returns:
        Feedback for this frame, or None if the frame was skipped
    """
    fresh = compute_angles(landmarks)
    if not fresh:
        return None
    session.angles.update(fresh)
    result, _ = evaluate(exercise, landmarks, session.angles, session, config)
    return result
