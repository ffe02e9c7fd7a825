"""
Post-session summary with AI feedback loading
"""

import logging
from concurrent.futures import Executor, Future
from typing import List, Optional, Sequence

from ..core import SessionStats, ShotEvent, SessionRecord, InsightsProvider
from ..core.constants import INSIGHTS_LOADING_TEXT, INSIGHTS_ERROR_TEXT
from ..networking.errors import InsightsError
from .aggregator import format_stats


class SessionSummary:
    """Presentation state for a finished session"""

    def __init__(self, stats: SessionStats, events: Sequence[ShotEvent], provider: InsightsProvider):
        self.stats = stats
        self.events: List[ShotEvent] = list(events)
        self.provider = provider

        self.insights = INSIGHTS_LOADING_TEXT
        self.is_loading = False
        self.error_message: Optional[str] = None

        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_record(cls, record: SessionRecord, provider: InsightsProvider) -> 'SessionSummary':
        return cls(record.stats, record.events, provider)

    def load_insights(self) -> Optional[str]:
        """
        Fetch feedback for the stats

        Failures are turned into ``error_message``; stats and events are
        never touched.
        """
        self.is_loading = True
        self.error_message = None
        try:
            self.insights = self.provider.fetch_insights(self.stats)
            return self.insights
        except InsightsError as e:
            self.logger.warning(f"Insights fetch failed: {e}")
            self.error_message = INSIGHTS_ERROR_TEXT
            return None
        except Exception:
            self.logger.exception("Insights provider raised unexpectedly")
            self.error_message = INSIGHTS_ERROR_TEXT
            return None
        finally:
            self.is_loading = False

    def load_insights_async(self, executor: Executor) -> Future:
        return executor.submit(self.load_insights)

    def stats_text(self) -> str:
        return format_stats(self.stats)

    def event_lines(self) -> List[str]:
        """One line per shot: outcome, distance and time"""
        if not self.events:
            return ["No shots recorded."]
        return [
            f"{'Make' if e.is_make else 'Miss'}  {e.distance_class.display_name}  "
            f"{e.timestamp.strftime('%H:%M:%S')}"
            for e in self.events
        ]
