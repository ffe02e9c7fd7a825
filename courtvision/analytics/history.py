"""
In-memory history of completed sessions
"""

import logging
import threading
import uuid
from collections import deque
from typing import Iterator, Optional, Tuple, Union

from ..core import SessionRecord


class SessionHistory:
    """Most-recent-first store of archived sessions"""

    def __init__(self, max_records: Optional[int] = None):
        """
        Initialize history

        Args:
            max_records: Keep at most this many records (None or 0 for unbounded)
        """
        self.max_records = max_records or None
        self._records = deque(maxlen=self.max_records)
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def prepend(self, record: SessionRecord):
        """Insert a record at the head, dropping the oldest past the limit"""
        with self._lock:
            if self.max_records and len(self._records) == self.max_records:
                dropped = self._records[-1]
                self.logger.debug(f"History full, dropping session {dropped.id}")
            self._records.appendleft(record)

    def records(self) -> Tuple[SessionRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def latest(self) -> Optional[SessionRecord]:
        with self._lock:
            return self._records[0] if self._records else None

    def get(self, record_id: Union[str, uuid.UUID]) -> Optional[SessionRecord]:
        """Look up a record by id"""
        try:
            wanted = record_id if isinstance(record_id, uuid.UUID) else uuid.UUID(str(record_id))
        except ValueError:
            return None

        for record in self.records():
            if record.id == wanted:
                return record
        return None

    def clear(self):
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(self.records())
