"""
Pose Coach Server
=================

Exercise form feedback and rep counting from 2D pose landmarks, served
over Flask with MediaPipe pose detection.

Modules:
    - analyzers: Geometry, angle extraction and per-exercise analyzers
    - api: Flask API routes and endpoints
    - config: Environment-driven settings
    - utils: Pose detection, overlay drawing and frame processing
"""

__version__ = "1.0.0"
__author__ = "Pose Coach Team"
