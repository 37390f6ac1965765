"""
Configuration Module
====================
"""

from .settings import (
    ServerConfig,
    DetectorConfig,
    AnalyzerConfig,
    get_server_config,
    get_detector_config,
    get_analyzer_config,
)

__all__ = [
    "ServerConfig",
    "DetectorConfig",
    "AnalyzerConfig",
    "get_server_config",
    "get_detector_config",
    "get_analyzer_config",
]
