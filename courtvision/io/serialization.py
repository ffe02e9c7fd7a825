"""
Data serialization utilities
"""

import json
import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union
from pathlib import Path

import numpy as np

from ..core import SessionRecord
from ..analytics.history import SessionHistory


class SessionJsonEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy, datetime, UUID and enum values"""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, uuid.UUID):
            return str(obj)
        elif isinstance(obj, Enum):
            return obj.value
        elif isinstance(obj, set):
            return list(obj)
        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()
        return super().default(obj)


class JsonSerializer:
    """JSON serialization utilities"""

    @staticmethod
    def dumps(data: Any, indent: Optional[int] = 2) -> str:
        return json.dumps(data, cls=SessionJsonEncoder, indent=indent)

    @staticmethod
    def save(data: Any, filepath: Union[str, Path], indent: int = 2):
        """Save data to JSON file"""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            json.dump(data, f, cls=SessionJsonEncoder, indent=indent)

    @staticmethod
    def load(filepath: Union[str, Path]) -> Any:
        """Load data from JSON file"""
        with open(filepath, 'r') as f:
            return json.load(f)


class HistoryStore:
    """File persistence for session history (most recent first)"""

    VERSION = 1

    def __init__(self, filepath: Union[str, Path], max_records: Optional[int] = None):
        self.filepath = Path(filepath)
        self.max_records = max_records
        self.logger = logging.getLogger(__name__)

    def save(self, history: SessionHistory):
        payload: Dict[str, Any] = {
            'version': self.VERSION,
            'sessions': [record.to_dict() for record in history.records()]
        }
        JsonSerializer.save(payload, self.filepath)
        self.logger.info(f"Saved {len(history)} sessions to {self.filepath}")

    def load(self) -> SessionHistory:
        history = SessionHistory(max_records=self.max_records)
        if not self.filepath.exists():
            return history

        data = JsonSerializer.load(self.filepath)
        # Stored newest first; prepend oldest first to keep that order
        for item in reversed(data.get('sessions', [])):
            history.prepend(SessionRecord.from_dict(item))
        return history

    def append(self, record: SessionRecord) -> SessionHistory:
        history = self.load()
        history.prepend(record)
        self.save(history)
        return history
