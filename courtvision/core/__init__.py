"""
Core domain models and interfaces for shot tracking sessions
"""

from .models import (
    ShotResult, DistanceClass, CalibrationCircle, CalibrationRectangle,
    CalibrationLine, CourtCalibration, ShotEvent, SessionStats, SessionRecord
)
from .interfaces import (
    ShotDetectionPipeline, FrameSource, InsightsProvider
)
from .constants import (
    MIN_RIM_RADIUS, MIN_BACKBOARD_WIDTH, MIN_BACKBOARD_HEIGHT,
    MOCK_SHOT_INTERVAL, INSIGHTS_LATENCY
)

__all__ = [
    # Models
    'ShotResult', 'DistanceClass', 'CalibrationCircle', 'CalibrationRectangle',
    'CalibrationLine', 'CourtCalibration', 'ShotEvent', 'SessionStats', 'SessionRecord',
    # Interfaces
    'ShotDetectionPipeline', 'FrameSource', 'InsightsProvider',
    # Constants
    'MIN_RIM_RADIUS', 'MIN_BACKBOARD_WIDTH', 'MIN_BACKBOARD_HEIGHT',
    'MOCK_SHOT_INTERVAL', 'INSIGHTS_LATENCY'
]
