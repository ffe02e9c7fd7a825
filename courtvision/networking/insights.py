"""
AI insights providers
"""

import logging
import time

from ..core import SessionStats, InsightsProvider
from ..core.constants import INSIGHTS_LATENCY
from .api_client import ApiClient
from .errors import ApiError, InsightsError


class MockInsightsService(InsightsProvider):
    """Simulates latency and returns a canned response"""

    def __init__(self, latency: float = INSIGHTS_LATENCY):
        self.latency = latency

    def fetch_insights(self, stats: SessionStats) -> str:
        if self.latency > 0:
            time.sleep(self.latency)
        fg = stats.field_goal_percentage * 100
        return (
            f"You attempted {stats.total_attempts} shots and made {stats.total_makes}. FG%: {fg:.1f}%.\n"
            "Expect richer AI-driven coaching tips here in a later release."
        )


class RemoteInsightsService(InsightsProvider):
    """Asks the backend for coaching feedback"""

    def __init__(self, client: ApiClient, path: str = "insights"):
        self.client = client
        self.path = path
        self.logger = logging.getLogger(__name__)

    def fetch_insights(self, stats: SessionStats) -> str:
        try:
            body = self.client.post(self.path, stats.to_dict())
        except ApiError as e:
            raise InsightsError(f"Insights request failed: {e}") from e

        if not isinstance(body, dict) or not isinstance(body.get('insights'), str):
            raise InsightsError("Malformed insights response")

        return body['insights']
