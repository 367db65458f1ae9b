"""
LogNormalizer Class - Handles validation and normalization

This module turns inbound gateway plugin payloads into LogEntry objects.
"""

from typing import Any

from models.data_models import LogEntry, RequestRecord, ResponseRecord
from services.errors import LogValidationError
from utils.helpers import get_nested, has_non_finite, new_entry_id, utc_now_iso

INVALID_FORMAT = 'Invalid log format. Either provide "message" field or "request"/"response" fields'
NON_FINITE = "Log entry must not contain NaN or Infinity values"


class LogNormalizer:
    """
    Normalizes request/response payloads into LogEntry objects.
    Responsibilities:
    - Reject payloads without both request and response
    - Default every missing sub-field
    - Stamp id and timestamp
    """

    @staticmethod
    def normalize(payload: Any) -> LogEntry:
        """
        Build a LogEntry from a raw payload.
        Any falsy sub-field (missing, null, "", 0, {}) takes its default.
        """
        if not isinstance(payload, dict) or not (payload.get("request") and payload.get("response")):
            raise LogValidationError(INVALID_FORMAT)

        def req(key: str) -> Any:
            return get_nested(payload, ("request", key))

        def resp(key: str) -> Any:
            return get_nested(payload, ("response", key))

        entry = LogEntry(
            id=new_entry_id(),
            timestamp=utc_now_iso(),
            request=RequestRecord(
                url=req("url") or "",
                method=req("method") or "",
                headers=req("headers") or {},
                body=req("body") or "",
            ),
            response=ResponseRecord(
                status_code=resp("status_code") or 0,
                headers=resp("headers") or {},
                body=resp("body") or "",
            ),
        )
        if has_non_finite(entry.to_dict()):
            raise LogValidationError(NON_FINITE)
        return entry
