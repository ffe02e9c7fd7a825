"""
Mock shot detection pipeline
"""

import logging
import threading
from typing import Optional

import numpy as np

from ..core import (
    CourtCalibration, ShotEvent, ShotResult, DistanceClass, ShotDetectionPipeline
)
from ..core.constants import MOCK_SHOT_INTERVAL, MOCK_DISTANCE_CLASSES


class MockShotPipeline(ShotDetectionPipeline):
    """Ignores frame content and periodically emits random shot events"""

    def __init__(self, emit_interval: Optional[float] = MOCK_SHOT_INTERVAL, seed: Optional[int] = None):
        """
        Initialize mock pipeline

        Args:
            emit_interval: Seconds between fake shots; None disables the timer
            seed: Seed for the random generator
        """
        super().__init__()
        self.emit_interval = emit_interval
        self.rng = np.random.default_rng(seed)
        self.logger = logging.getLogger(__name__)

        self.frames_processed = 0
        self.shots_emitted = 0

        self._active = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._rng_lock = threading.Lock()

    @property
    def is_active(self) -> bool:
        return self._active.is_set()

    def start_session(self, calibration: CourtCalibration) -> None:
        self._active.set()
        self._start_emitter()

    def stop_session(self) -> None:
        self._active.clear()
        self._stop_emitter()

    def process_frame(self, frame: np.ndarray, calibration: CourtCalibration) -> None:
        if not self.is_active:
            return
        # A real detector would look for ball, rim and backboard here
        self.frames_processed += 1

    def emit_random_shot(self) -> Optional[ShotEvent]:
        """Create one random shot and deliver it (only while active)"""
        if not self.is_active:
            return None

        with self._rng_lock:
            made = bool(self.rng.integers(0, 2))
            distance = DistanceClass(str(self.rng.choice(MOCK_DISTANCE_CLASSES)))

        event = ShotEvent(result=ShotResult.MAKE if made else ShotResult.MISS, distance_class=distance)
        self.shots_emitted += 1
        self.logger.debug(f"Mock pipeline emitting shot: {event.result.value} ({distance.display_name})")

        handler = self.on_shot_event
        if handler is not None:
            handler(event)
        return event

    def _start_emitter(self):
        self._stop_emitter()
        if not self.emit_interval:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="MockShotEmitter", daemon=True)
        self._thread.start()

    def _run(self):
        # wait() returns True once stop is requested
        while not self._stop.wait(self.emit_interval):
            self.emit_random_shot()

    def _stop_emitter(self, timeout: float = 2.0):
        self._stop.set()
        thread = self._thread
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
