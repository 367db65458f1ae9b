"""
LogStore Class - Handles file I/O operations

This module owns the on-disk log collection: a single pretty-printed JSON
array, newest entry first. Every write replaces the whole file.
"""

import copy
import json
import logging
import os
import stat
import tempfile
from typing import Any, Dict, List, Optional

from models.data_models import HealthStatus
from utils.helpers import parse_ts

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class LogStore:
    """
    Manages the log collection file.
    Responsibilities:
    - Load the full collection (missing file reads as empty)
    - Replace the full collection atomically
    - Provide file statistics
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def load(self) -> List[Dict[str, Any]]:
        """
        Read the full collection.
        Unreadable or malformed content is logged and read as empty.
        """
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.error("Error reading logs from %s: %s", self.file_path, e)
            return []

        if not isinstance(data, list):
            logger.error("Error reading logs from %s: expected a JSON array", self.file_path)
            return []
        return data

    def save(self, logs: List[Dict[str, Any]]) -> bool:
        """Write the full collection, returns False on failure"""
        try:
            self._ensure_parent_dir()
            text = json.dumps(logs, indent=2, ensure_ascii=False, allow_nan=False)
            fd, tmp = tempfile.mkstemp(dir=os.path.dirname(os.path.abspath(self.file_path)))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    os.chmod(tmp, self._file_mode())
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp, self.file_path)
            except Exception:
                os.unlink(tmp)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error writing logs to %s: %s", self.file_path, e)
            return False
        return True

    def stat(self) -> HealthStatus:
        """Get file statistics"""
        exists = os.path.exists(self.file_path)
        size_bytes = os.path.getsize(self.file_path) if exists else 0
        return _build_status(self.load(), exists, os.path.abspath(self.file_path), size_bytes)

    def _file_mode(self) -> int:
        """Mode of the existing file, mkstemp alone would leave 0600"""
        try:
            return stat.S_IMODE(os.stat(self.file_path).st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _ensure_parent_dir(self) -> None:
        """Create parent directories if needed"""
        os.makedirs(os.path.dirname(os.path.abspath(self.file_path)), exist_ok=True)


class MemoryLogStore:
    """In-process store with the LogStore interface, used by tests"""

    def __init__(self, logs: Optional[List[Dict[str, Any]]] = None):
        self._logs = copy.deepcopy(logs) if logs else []
        self._saved = logs is not None

    def load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._logs)

    def save(self, logs: List[Dict[str, Any]]) -> bool:
        self._logs = copy.deepcopy(logs)
        self._saved = True
        return True

    def stat(self) -> HealthStatus:
        return _build_status(self._logs, self._saved, ":memory:", 0)


def _build_status(logs: List[Dict[str, Any]], exists: bool, path: str, size_bytes: int) -> HealthStatus:
    latest = None
    if logs and isinstance(logs[0], dict):
        ts = parse_ts(logs[0].get("timestamp"))
        latest = ts.isoformat() if ts else None

    return HealthStatus(
        exists=exists,
        path=path,
        size_bytes=size_bytes,
        total_logs=len(logs),
        latest_timestamp=latest,
    )
