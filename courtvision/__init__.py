"""
Court Vision shot tracking

Session core for a basketball shootaround app:
- Court calibration validation
- Shot ingestion from a detection pipeline and manual entry
- Session statistics aggregation
- Archived session history
- AI feedback loading
"""

__version__ = "1.0.0"

# Import main components for easy access
from .core import (
    CourtCalibration, ShotEvent, ShotResult, DistanceClass,
    SessionStats, SessionRecord
)

from .analytics import SessionController, SessionHistory, SessionSummary, StartResult

from .pipeline import MockShotPipeline, SimulatedFrameSource

from .networking import MockInsightsService

__all__ = [
    # Core models
    'CourtCalibration', 'ShotEvent', 'ShotResult', 'DistanceClass',
    'SessionStats', 'SessionRecord',

    # Session
    'SessionController', 'SessionHistory', 'SessionSummary', 'StartResult',

    # Collaborators
    'MockShotPipeline', 'SimulatedFrameSource', 'MockInsightsService',

    # Version
    '__version__'
]
