"""
Simulated camera frame source
"""

import logging
import threading
import time
from typing import Optional

import numpy as np

from ..core import FrameSource
from ..core.constants import DEFAULT_FRAME_WIDTH, DEFAULT_FRAME_HEIGHT, DEFAULT_FRAME_RATE


class SimulatedFrameSource(FrameSource):
    """Produces blank frames at a fixed rate, standing in for a camera"""

    def __init__(self,
                 width: int = DEFAULT_FRAME_WIDTH,
                 height: int = DEFAULT_FRAME_HEIGHT,
                 fps: float = DEFAULT_FRAME_RATE,
                 available: bool = True,
                 authorized: bool = True):
        """
        Initialize frame source

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            fps: Frames per second
            available: Whether a capture device exists
            authorized: Whether capture access was granted
        """
        super().__init__()
        self.width = width
        self.height = height
        self.fps = fps
        self.available = available
        self.authorized = authorized
        self.logger = logging.getLogger(__name__)

        self.frames_delivered = 0
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start_running(self) -> None:
        if not self.available:
            self.logger.warning("Camera unavailable; start ignored")
            return
        if not self.authorized:
            self.logger.warning("Camera access not authorized; start ignored")
            return
        if self.is_running:
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="SimulatedFrameSource", daemon=True)
        self._thread.start()

    def stop_running(self) -> None:
        self._stop.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)
        self._thread = None

    def next_frame(self) -> np.ndarray:
        return np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def _run(self):
        interval = 1.0 / self.fps if self.fps > 0 else 0.0
        while not self._stop.is_set():
            t0 = time.perf_counter()

            handler = self.on_frame
            if handler is not None:
                try:
                    handler(self.next_frame())
                except Exception:
                    self.logger.exception("Frame handler failed")
            self.frames_delivered += 1

            remain = interval - (time.perf_counter() - t0)
            if remain > 0:
                self._stop.wait(remain)
