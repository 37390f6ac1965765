"""
Plank Analyzer Module
=====================

Plank form feedback. Planks are held rather than repeated, so there is no
rep counting and no state between frames.
"""

from typing import Optional, Sequence

from ..config import AnalyzerConfig
from .geometry import alignment_deviation
from .landmarks import body_line
from .models import FeedbackResult, Landmark

SUCCESS_MESSAGE = "Great plank!"
NOTE_STRAIGHT_LINE = "Keep your body in a straight line."
NOTE_HIPS = "Don't let hips sag or pike."


def evaluate_plank(
    landmarks: Sequence[Optional[Landmark]],
    config: Optional[AnalyzerConfig] = None,
) -> FeedbackResult:
    """Check the shoulder-hip-ankle line and hip height for one frame."""
    config = config or AnalyzerConfig()
    notes = []

    line = body_line(landmarks)
    if line is not None:
        shoulder, hip, ankle = line
        if alignment_deviation(shoulder, hip, ankle) > config.alignment_tolerance:
            notes.append(NOTE_STRAIGHT_LINE)
        if abs(shoulder.y - hip.y) > config.plank_hip_tolerance:
            notes.append(NOTE_HIPS)

    return FeedbackResult.from_notes(notes, SUCCESS_MESSAGE)
