"""
Shoot session lifecycle: calibration gate, shot ingestion, archival
"""

import logging
import queue
import threading
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from ..core import (
    CourtCalibration, ShotEvent, ShotResult, DistanceClass,
    SessionStats, SessionRecord, ShotDetectionPipeline, FrameSource
)
from ..core.constants import DISPATCH_POLL_INTERVAL
from .aggregator import record_shot
from .history import SessionHistory


class SessionState(Enum):
    """Lifecycle state of the controller"""
    IDLE = "idle"
    ACTIVE = "active"


class StartResult(Enum):
    """Outcome of a start request"""
    STARTED = "started"
    INVALID_CALIBRATION = "invalid_calibration"


class EventInbox:
    """Queue carrying shot events from producer threads to the session owner"""

    def __init__(self):
        self._queue: "queue.Queue[ShotEvent]" = queue.Queue()

    def put(self, event: ShotEvent):
        self._queue.put(event)

    def get(self, timeout: Optional[float] = None) -> Optional[ShotEvent]:
        """Block up to timeout for the next event; None when nothing arrives"""
        try:
            if timeout is None:
                return self._queue.get_nowait()
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> List[ShotEvent]:
        """Take every queued event without blocking"""
        events = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events

    def __len__(self) -> int:
        return self._queue.qsize()


class SessionController:
    """
    Owns the active session's stats and event log

    All writes to the session state happen under a single lock, so the
    controller behaves as one serialized owner no matter which thread calls
    it. Start and end are serialized with each other by a lifecycle lock
    held while collaborators are signalled, so the pipeline and frame source
    always follow the last transition. The detection pipeline delivers events
    through ``submit`` onto the inbox; they are applied when the owner drains
    it. Manual shots are applied synchronously.
    """

    def __init__(self,
                 pipeline: ShotDetectionPipeline,
                 frame_source: Optional[FrameSource] = None,
                 history: Optional[SessionHistory] = None,
                 calibration: Optional[CourtCalibration] = None):
        """
        Initialize session controller

        Args:
            pipeline: Detection collaborator producing shot events
            frame_source: Camera collaborator feeding frames to the pipeline
            history: Store for archived sessions
            calibration: Initial calibration shown before the first session
        """
        self.pipeline = pipeline
        self.frame_source = frame_source
        self.history = history if history is not None else SessionHistory()
        self.inbox = EventInbox()
        self.logger = logging.getLogger(__name__)

        self._lock = threading.RLock()
        # Held across a transition and its collaborator calls; never taken by frame or event callbacks
        self._lifecycle_lock = threading.RLock()
        self._state = SessionState.IDLE
        self._calibration = calibration.copy() if calibration else CourtCalibration()
        self._stats = SessionStats()
        self._events: List[ShotEvent] = []

        self._bind_collaborators()

    def _bind_collaborators(self):
        self.pipeline.on_shot_event = self.submit
        if self.frame_source is not None:
            self.frame_source.on_frame = self._forward_frame

    def _forward_frame(self, frame: np.ndarray):
        # Runs on the frame source's thread
        self.pipeline.process_frame(frame, self.calibration)

    # ------------------------------------------------------------------
    # Point-in-time reads

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def calibration(self) -> CourtCalibration:
        with self._lock:
            return self._calibration.copy()

    @property
    def stats(self) -> SessionStats:
        with self._lock:
            return self._stats.snapshot()

    @property
    def events(self) -> Tuple[ShotEvent, ...]:
        with self._lock:
            return tuple(self._events)

    # ------------------------------------------------------------------
    # Lifecycle

    def start_session(self, calibration: CourtCalibration) -> StartResult:
        """
        Start a new session

        Refused without any state change when the calibration is invalid.
        Starting while a session is running resets it without archiving.
        """
        if not calibration.is_valid():
            self.logger.warning("Calibration invalid; refusing to start session")
            return StartResult.INVALID_CALIBRATION

        with self._lifecycle_lock:
            with self._lock:
                if self.is_active:
                    self.logger.info("Session already active; restarting with fresh stats")

                stale = self.inbox.drain()
                if stale:
                    self.logger.debug(f"Discarded {len(stale)} stale shot events")

                self._calibration = calibration.copy()
                self._stats = SessionStats()
                self._events = []
                self._state = SessionState.ACTIVE
                session_calibration = self._calibration.copy()

            self.logger.info("Session started")
            self._signal(self.pipeline.start_session, session_calibration)
            if self.frame_source is not None:
                self._signal(self.frame_source.start_running)

        return StartResult.STARTED

    def end_session(self) -> Optional[SessionRecord]:
        """
        End the active session

        Returns:
            The archived record, or None when no session was active or no
            shots were recorded
        """
        record = None
        with self._lifecycle_lock:
            with self._lock:
                if not self.is_active:
                    return None

                # Keep shots the pipeline produced while the session was running
                self.drain_inbox()
                self._state = SessionState.IDLE

                if self._stats.total_attempts > 0:
                    record = SessionRecord.create(self._stats, self._events)
                    self.history.prepend(record)

            # Frame callbacks read the calibration, so stop collaborators outside the state lock
            self._signal(self.pipeline.stop_session)
            if self.frame_source is not None:
                self._signal(self.frame_source.stop_running)

        if record is None:
            self.logger.info("Session ended with no attempts; nothing archived")
        else:
            self.logger.info(
                f"Session ended: {record.stats.total_makes}/{record.stats.total_attempts} "
                f"archived as {record.id}"
            )
        return record

    # ------------------------------------------------------------------
    # Event ingestion

    def ingest_event(self, event: ShotEvent) -> bool:
        """
        Apply a shot to the active session

        Returns:
            True when the shot was recorded, False when no session is active
        """
        with self._lock:
            if not self.is_active:
                self.logger.debug(f"Dropping shot {event.id}: no active session")
                return False

            record_shot(self._stats, event)
            self._events.append(event)
            return True

    def register_manual_shot(self,
                             result: ShotResult,
                             distance_class: DistanceClass = DistanceClass.UNKNOWN) -> bool:
        """Record a shot entered by the user"""
        return self.ingest_event(ShotEvent(result=result, distance_class=distance_class))

    def submit(self, event: ShotEvent):
        """Thread-safe entry for asynchronous producers"""
        self.inbox.put(event)

    def drain_inbox(self, timeout: Optional[float] = None) -> int:
        """
        Apply queued events on the calling (owner) context

        Args:
            timeout: Seconds to wait for a first event; None does not block

        Returns:
            Number of events recorded
        """
        events = self.inbox.drain()
        if not events and timeout is not None:
            first = self.inbox.get(timeout=timeout)
            if first is not None:
                events = [first] + self.inbox.drain()

        accepted = 0
        for event in events:
            if self.ingest_event(event):
                accepted += 1
        return accepted

    def _signal(self, action, *args):
        """Fire-and-forget call into a collaborator"""
        try:
            action(*args)
        except Exception:
            self.logger.exception(f"Collaborator call {getattr(action, '__qualname__', action)} failed")


class SessionDispatcher:
    """Background thread that keeps applying queued pipeline events"""

    def __init__(self, controller: SessionController, poll_interval: float = DISPATCH_POLL_INTERVAL):
        self.controller = controller
        self.poll_interval = poll_interval
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()
        self.logger = logging.getLogger(__name__)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="SessionDispatcher", daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stop.is_set():
            self.controller.drain_inbox(timeout=self.poll_interval)

    def stop(self, timeout: float = 2.0):
        self._stop.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        self._thread = None
