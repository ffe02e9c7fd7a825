"""
Abstract interfaces for the collaborators a shot tracking session talks to
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import numpy as np

from .models import CourtCalibration, ShotEvent, SessionStats


class ShotDetectionPipeline(ABC):
    """Abstract interface for shot detection from camera frames"""

    def __init__(self):
        # Called with every detected ShotEvent, possibly from a worker thread
        self.on_shot_event: Optional[Callable[[ShotEvent], None]] = None

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Whether the pipeline is currently watching for shots"""
        pass

    @abstractmethod
    def start_session(self, calibration: CourtCalibration) -> None:
        """Begin producing shot events for the given court geometry"""
        pass

    @abstractmethod
    def stop_session(self) -> None:
        """Stop producing shot events"""
        pass

    @abstractmethod
    def process_frame(self, frame: np.ndarray, calibration: CourtCalibration) -> None:
        """Inspect a single camera frame"""
        pass


class FrameSource(ABC):
    """Abstract interface for a camera or other frame producer"""

    def __init__(self):
        self.on_frame: Optional[Callable[[np.ndarray], None]] = None

    @property
    @abstractmethod
    def is_running(self) -> bool:
        pass

    @abstractmethod
    def start_running(self) -> None:
        pass

    @abstractmethod
    def stop_running(self) -> None:
        pass


class InsightsProvider(ABC):
    """Abstract interface for post-session coaching feedback"""

    @abstractmethod
    def fetch_insights(self, stats: SessionStats) -> str:
        """Return feedback text for the stats. Raises InsightsError on failure."""
        pass
