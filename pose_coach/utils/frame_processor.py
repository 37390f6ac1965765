"""
Mobile Frame Processor Module
=============================

Thread-safe processor for frames and landmarks sent from mobile devices.
"""

import logging
import threading
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from ..analyzers import (
    Exercise,
    FeedbackResult,
    Landmark,
    SessionState,
    angles_to_dict,
    process_pose,
    reset_session,
)
from ..config import AnalyzerConfig, get_analyzer_config
from .pose_detector import PoseDetector, draw_overlay

logger = logging.getLogger(__name__)


class MobileFrameProcessor:
    """
    Thread-safe owner of the coaching session.

    Holds the session state, the active exercise and a lazily created pose
    detector. Flask serves requests on several threads, so every frame is
    processed under a lock and the analyzers only ever see one frame at a
    time.

    Usage:
        processor = MobileFrameProcessor()
        processor.select_exercise(Exercise.SQUAT)
        result, state = processor.process_landmarks(landmarks)
        annotated, result, state = processor.process_frame(frame)
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None,
                 detector: Optional[PoseDetector] = None):
        """Initialize the mobile frame processor."""
        self.config = config or get_analyzer_config()
        self.session = SessionState()
        self.exercise = Exercise.PUSHUP
        self._detector = detector
        self._lock = threading.Lock()

    def get_detector(self) -> PoseDetector:
        """
        Get or create the pose detector instance.

        Returns:
            Shared pose detector
        """
        with self._lock:
            if self._detector is None:
                self._detector = PoseDetector()
            return self._detector

    def select_exercise(self, exercise: Exercise) -> Exercise:
        """Switch the active exercise. Rep counts of every exercise are kept."""
        with self._lock:
            self.exercise = Exercise(exercise)
            logger.info("Active exercise: %s", self.exercise.value)
            return self.exercise

    def _resolve(self, exercise: Optional[Exercise]) -> Exercise:
        if exercise is None:
            return self.exercise
        self.exercise = Exercise(exercise)
        return self.exercise

    def process_landmarks(
        self,
        landmarks: Optional[Sequence[Optional[Landmark]]],
        exercise: Optional[Exercise] = None,
    ) -> Tuple[Optional[FeedbackResult], Dict[str, Any]]:
        """
        Run the coaching pipeline on one frame of landmarks.

        Args:
            landmarks: Frame landmarks, or None when no pose was detected
            exercise: Exercise to evaluate, defaults to the active one

        Returns:
            Tuple of (feedback or None if the frame was skipped, display state
            of the evaluated exercise)
        """
        with self._lock:
            exercise = self._resolve(exercise)
            result = process_pose(self.session, exercise, landmarks, self.config)
            return result, self._snapshot(exercise)

    def process_frame(
        self,
        frame: np.ndarray,
        exercise: Optional[Exercise] = None,
    ) -> Tuple[np.ndarray, Optional[FeedbackResult], Dict[str, Any]]:
        """
        Detect the pose in a BGR frame, evaluate it and draw the overlay.

        Returns:
            Tuple of (annotated frame, feedback or None if skipped, display state)
        """
        detector = self.get_detector()
        with self._lock:
            exercise = self._resolve(exercise)
            landmarks = detector.detect(frame)
            result = process_pose(self.session, exercise, landmarks, self.config)
            snapshot = self._snapshot(exercise)
            annotated = draw_overlay(
                frame,
                landmarks,
                self.session.angles,
                self.session.feedback.get(exercise),
                exercise.value,
                reps=snapshot["reps"],
                stage=snapshot["stage"],
            )
        return annotated, result, snapshot

    def reset(self, exercise: Optional[Exercise] = None) -> None:
        """Reset the counters and state of one exercise (default: active)."""
        with self._lock:
            exercise = Exercise(exercise) if exercise is not None else self.exercise
            reset_session(self.session, exercise)
            logger.info("Reset %s analyzer", exercise.value)

    def _snapshot(self, exercise: Exercise) -> Dict[str, Any]:
        # Caller holds the lock
        feedback = self.session.feedback.get(exercise)
        data = {
            "exercise": exercise.value,
            "feedback": feedback.message if feedback else "",
            "good_form": feedback.good_form if feedback else None,
            "notes": list(feedback.notes) if feedback else [],
            "angles": angles_to_dict(self.session.angles),
        }
        if exercise == Exercise.PLANK:
            data.update(reps=None, stage=None)
        else:
            state = self.session.rep_state(exercise)
            data.update(reps=state.reps, stage=state.phase.value)
        return data

    def snapshot(self, exercise: Optional[Exercise] = None) -> Dict[str, Any]:
        """
        Current display state for an exercise.

        Returns:
            Dictionary with the last feedback, rep count, stage and angles
        """
        with self._lock:
            exercise = Exercise(exercise) if exercise is not None else self.exercise
            return self._snapshot(exercise)
