"""
Session lifecycle and shooting analytics
"""

from .aggregator import record_shot, aggregate_events, summarize_stats, format_stats
from .history import SessionHistory
from .session import SessionController, SessionDispatcher, SessionState, StartResult, EventInbox
from .summary import SessionSummary

__all__ = [
    'record_shot', 'aggregate_events', 'summarize_stats', 'format_stats',
    'SessionHistory',
    'SessionController', 'SessionDispatcher', 'SessionState', 'StartResult', 'EventInbox',
    'SessionSummary'
]
