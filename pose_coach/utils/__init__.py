"""
Utilities Module
================

Pose detection, frame overlay and the shared frame processor.
"""

from .frame_processor import MobileFrameProcessor
from .pose_detector import PoseDetector, draw_overlay

__all__ = ["MobileFrameProcessor", "PoseDetector", "draw_overlay"]
