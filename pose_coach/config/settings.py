"""
Server Configuration
====================

Configuration settings for the pose coach server and its exercise analyzers.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class ServerConfig:
    """Server configuration settings."""
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    log_level: str = "INFO"


@dataclass
class DetectorConfig:
    """MediaPipe pose detector settings."""
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class AnalyzerConfig:
    """Analyzer thresholds (angles in degrees, distances in normalized coords)."""
    # Frames above the "up" angle needed before counting starts
    debounce_frames: int = 5

    # Push-up thresholds (left elbow)
    pushup_up_angle: float = 150.0
    pushup_down_angle: float = 90.0
    pushup_depth_angle: float = 100.0

    # Shoulder-hip-ankle line, shared by push-up and plank
    alignment_tolerance: float = 10.0

    # Squat thresholds (left knee)
    squat_up_angle: float = 160.0
    squat_down_angle: float = 110.0
    squat_min_knee_angle: float = 110.0
    squat_max_knee_angle: float = 130.0
    torso_min_angle: float = 40.0
    torso_max_angle: float = 55.0
    knee_over_toe_tolerance: float = 0.1

    # Plank thresholds
    plank_hip_tolerance: float = 0.05


def get_server_config() -> ServerConfig:
    """Get server configuration from environment."""
    return ServerConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=os.getenv("DEBUG", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def get_detector_config() -> DetectorConfig:
    """Get pose detector configuration from environment."""
    return DetectorConfig(
        model_complexity=int(os.getenv("POSE_MODEL_COMPLEXITY", "1")),
        min_detection_confidence=float(os.getenv("POSE_MIN_DETECTION_CONFIDENCE", "0.5")),
        min_tracking_confidence=float(os.getenv("POSE_MIN_TRACKING_CONFIDENCE", "0.5")),
    )


def get_analyzer_config() -> AnalyzerConfig:
    """Get analyzer configuration from environment."""
    return AnalyzerConfig(
        debounce_frames=int(os.getenv("DEBOUNCE_FRAMES", "5")),
        alignment_tolerance=float(os.getenv("ALIGNMENT_TOLERANCE", "10")),
    )
