"""
Core Data Types
===============

Points, landmarks, exercises and feedback results shared by the analyzers.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Tuple


@dataclass(frozen=True)
class Point:
    """2D point in normalized [0, 1] image coordinates."""
    x: float
    y: float


@dataclass(frozen=True)
class Landmark:
    """
    Tracked body point with a confidence score.

    Attributes:
        x (float): Normalized horizontal position
        y (float): Normalized vertical position (grows downwards)
        visibility (float): Confidence in [0, 1] that the position is correct
    """
    x: float
    y: float
    visibility: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Landmark":
        """
        Build a landmark from a JSON object with x, y and visibility keys.

        Raises:
            KeyError: If x or y is missing
            ValueError: If a value is not a finite number
        """
        landmark = cls(
            x=float(data["x"]),
            y=float(data["y"]),
            visibility=float(data.get("visibility", 0.0)),
        )
        if not all(math.isfinite(v) for v in (landmark.x, landmark.y, landmark.visibility)):
            raise ValueError(f"Non-finite landmark value: {landmark}")
        return landmark


class Exercise(str, Enum):
    """Exercises the coach can evaluate."""
    PUSHUP = "pushup"
    SQUAT = "squat"
    PLANK = "plank"

    @classmethod
    def parse(cls, name: str) -> "Exercise":
        """
        Resolve an exercise from a user-supplied name.

        Raises:
            ValueError: If the name does not match a known exercise
        """
        key = str(name).strip().lower().replace("-", "").replace("_", "")
        for exercise in cls:
            if exercise.value == key:
                return exercise
        raise ValueError(f"Unknown exercise: {name!r}")


@dataclass(frozen=True)
class FeedbackResult:
    """
    Outcome of evaluating one frame.

    Attributes:
        message (str): Text shown to the user
        notes (tuple): Individual corrections, empty when form is good
        good_form (bool): Whether the message is the "all good" message
    """
    message: str
    notes: Tuple[str, ...] = field(default_factory=tuple)
    good_form: bool = True

    @classmethod
    def from_notes(cls, notes, success_message: str) -> "FeedbackResult":
        notes = tuple(notes)
        if not notes:
            return cls(message=success_message, notes=(), good_form=True)
        return cls(message=" ".join(notes), notes=notes, good_form=False)
