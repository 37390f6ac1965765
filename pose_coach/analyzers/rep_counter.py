"""
Rep Counter
===========

Up/down state machine shared by the push-up and squat analyzers.

    NOT_READY --(angle > up for N frames)--> UP
    UP        --(angle < down)-------------> DOWN
    DOWN      --(angle > up, rep + 1)------> UP
"""

import logging
from typing import Optional

from .session import RepPhase, RepState

logger = logging.getLogger(__name__)


def advance_rep_state(
    state: RepState,
    angle: Optional[float],
    up_threshold: float,
    down_threshold: float,
    debounce_frames: int,
) -> bool:
    """
    Feed one frame's driving angle into the state machine.

    Args:
        state: Rep state to update in place
        angle: Driving joint angle, or None if unknown this frame
        up_threshold: Angle above which the joint counts as extended
        down_threshold: Angle below which the joint counts as flexed
        debounce_frames: Consecutive extended frames needed to leave NOT_READY

    Returns:
        True if this frame completed a rep
    """
    if angle is None:
        return False

    if state.phase == RepPhase.NOT_READY:
        if angle > up_threshold:
            state.up_frames += 1
            if state.up_frames >= debounce_frames:
                state.phase = RepPhase.UP
                state.up_frames = 0
                logger.debug("Start position held for %d frames, counting reps", debounce_frames)
        else:
            state.up_frames = 0
    elif state.phase == RepPhase.UP and angle < down_threshold:
        state.phase = RepPhase.DOWN
    elif state.phase == RepPhase.DOWN and angle > up_threshold:
        state.phase = RepPhase.UP
        state.reps += 1
        logger.debug("Rep completed (total %d)", state.reps)
        return True
    return False
