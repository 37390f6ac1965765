"""
Session State
=============

Per-exercise rep counters and the shared angle map, owned by the caller and
passed into the analyzers frame by frame.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .angles import AngleMap
from .models import Exercise, FeedbackResult

logger = logging.getLogger(__name__)


class RepPhase(str, Enum):
    """Rep state machine phases."""
    NOT_READY = "not_ready"
    UP = "up"
    DOWN = "down"


@dataclass
class RepState:
    """
    Rep counting state for one exercise.

    Attributes:
        phase (RepPhase): Current state machine phase
        reps (int): Completed repetitions
        up_frames (int): Consecutive frames in the start position while NOT_READY
    """
    phase: RepPhase = RepPhase.NOT_READY
    reps: int = 0
    up_frames: int = 0


@dataclass
class SessionState:
    """Everything that survives from one frame to the next."""
    angles: AngleMap = field(default_factory=dict)
    pushup: RepState = field(default_factory=RepState)
    squat: RepState = field(default_factory=RepState)
    plank: RepState = field(default_factory=RepState)
    feedback: Dict[Exercise, FeedbackResult] = field(default_factory=dict)

    def rep_state(self, exercise: Exercise) -> RepState:
        """Return the rep state slice for an exercise."""
        return getattr(self, Exercise(exercise).value)


def reset_session(session: SessionState, exercise: Exercise) -> SessionState:
    """
    Zero the rep counter and state machine of a single exercise.

    Other exercises and the angle map are left untouched.
    """
    exercise = Exercise(exercise)
    setattr(session, exercise.value, RepState())
    session.feedback.pop(exercise, None)
    logger.debug("Reset %s session state", exercise.value)
    return session
