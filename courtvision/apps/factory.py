"""
Wire settings into session collaborators
"""

import logging
from typing import Optional

from ..analytics import SessionController, SessionHistory
from ..config import Settings, get_settings
from ..core import InsightsProvider
from ..networking import ApiClient, MockInsightsService, RemoteInsightsService
from ..pipeline import MockShotPipeline, SimulatedFrameSource

logger = logging.getLogger(__name__)


def create_session_controller(settings: Optional[Settings] = None,
                              history: Optional[SessionHistory] = None,
                              with_frame_source: bool = True) -> SessionController:
    """Build a controller with the mock pipeline and simulated camera"""
    settings = settings or get_settings()

    interval = settings.mock_shot_interval if settings.enable_mock_shot_generation else None
    pipeline = MockShotPipeline(emit_interval=interval, seed=settings.mock_seed)

    frame_source = None
    if with_frame_source:
        frame_source = SimulatedFrameSource(
            width=settings.frame_width,
            height=settings.frame_height,
            fps=settings.frame_rate
        )

    if history is None:
        history = SessionHistory(max_records=settings.history_limit or None)

    logger.info(
        f"Session controller ready ({settings.environment_name}, "
        f"mock shots {'on' if interval else 'off'})"
    )
    return SessionController(pipeline, frame_source=frame_source, history=history)


def create_insights_provider(settings: Optional[Settings] = None) -> InsightsProvider:
    """Pick the remote service when enabled, the canned mock otherwise"""
    settings = settings or get_settings()

    if settings.use_remote_insights:
        client = ApiClient(settings.api_base_url, timeout=settings.api_timeout)
        return RemoteInsightsService(client)
    return MockInsightsService(latency=settings.insights_latency)
