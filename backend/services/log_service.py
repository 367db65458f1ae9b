"""
LogService Class - Ingestion and retrieval

This module applies the collection policy on top of a store:
newest entry first, whole-collection writes, numeric read limit.
"""

import logging
import threading
from typing import Any, Optional, Tuple

from models.data_models import LogEntry, RetrievalResult
from services.errors import LogPersistenceError, LogValidationError
from services.normalizer import LogNormalizer
from utils.helpers import safe_int

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class LogService:
    """
    Orchestrates the log collection.
    Responsibilities:
    - Normalize, prepend and persist new entries
    - Serve the newest entries up to a limit
    """

    def __init__(self, log_store, log_normalizer: Optional[LogNormalizer] = None):
        self.store = log_store
        self.normalizer = log_normalizer or LogNormalizer()
        # Held across load -> prepend -> save so concurrent writers cannot drop entries
        self._lock = threading.Lock()

    def ingest(self, payload: Any) -> Tuple[LogEntry, int]:
        """Store a new entry at the head of the collection, returns (entry, total)"""
        entry = self.normalizer.normalize(payload)

        with self._lock:
            logs = self.store.load()
            logs.insert(0, entry.to_dict())
            if not self.store.save(logs):
                raise LogPersistenceError("Failed to save log entry")

        logger.info("Stored log entry %s (%d total)", entry.id, len(logs))
        return entry, len(logs)

    def retrieve(self, limit: Any = None) -> RetrievalResult:
        """Return the newest `limit` entries plus the full collection size"""
        limit_num = DEFAULT_LIMIT if limit is None else safe_int(limit)
        if limit_num is None or limit_num < 1:
            raise LogValidationError("Limit must be a positive number")

        all_logs = self.store.load()
        logs = all_logs[:limit_num]

        return RetrievalResult(
            logs=logs,
            total_logs=len(all_logs),
            returned_logs=len(logs),
            limit=limit_num,
        )
