"""
Data Models (DTOs - Data Transfer Objects)

This module contains all dataclass definitions used throughout the application.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

ENTRY_TYPE = "kong_request_response"


@dataclass
class RequestRecord:
    """Captured upstream request"""
    url: str = ""
    method: str = ""
    headers: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


@dataclass
class ResponseRecord:
    """Captured upstream response"""
    status_code: int = 0
    headers: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


@dataclass
class LogEntry:
    """Represents a single normalized gateway log entry"""
    id: str
    timestamp: str
    request: RequestRecord
    response: ResponseRecord
    type: str = ENTRY_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape, as persisted and as returned over HTTP"""
        return {
            "id": self.id,
            "type": self.type,
            "timestamp": self.timestamp,
            "request": asdict(self.request),
            "response": asdict(self.response),
        }


@dataclass
class RetrievalResult:
    """Slice of the collection returned by a read"""
    logs: List[Dict[str, Any]]
    total_logs: int
    returned_logs: int
    limit: int


@dataclass
class HealthStatus:
    """Backing file statistics"""
    exists: bool
    path: str
    size_bytes: int
    total_logs: int
    latest_timestamp: Optional[str] = None
