"""
Serialization and history persistence
"""

from .serialization import SessionJsonEncoder, JsonSerializer, HistoryStore

__all__ = ['SessionJsonEncoder', 'JsonSerializer', 'HistoryStore']
