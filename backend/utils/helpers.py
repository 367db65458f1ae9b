"""
Helper Functions

This module contains utility functions used throughout the application.
"""

import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as dtparser

_INT_RE = re.compile(r"^-?[0-9]+\Z")


def parse_ts(x: Any) -> Optional[datetime]:
    """Parse timestamp from various formats"""
    if not x:
        return None
    try:
        dt = dtparser.isoparse(str(x))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def utc_now_iso() -> str:
    """Current UTC time, millisecond precision, 'Z' suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_entry_id() -> str:
    return str(uuid.uuid4())


def safe_int(x: Any) -> Optional[int]:
    """Safely convert to int"""
    if isinstance(x, bool):
        return None
    if isinstance(x, str):
        x = x.strip()
        # ASCII digits only, int() also takes "1_0" and non-Latin digits
        if not _INT_RE.match(x):
            return None
    try:
        return int(x)
    except (TypeError, ValueError, OverflowError):
        return None


def get_nested(d: Dict[str, Any], path: Tuple[str, ...]) -> Any:
    """Safely read nested dict keys"""
    cur: Any = d
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return None
        cur = cur[k]
    return cur


def has_non_finite(x: Any) -> bool:
    """True if x holds NaN or +/-Infinity anywhere, which strict JSON cannot encode"""
    if isinstance(x, float):
        return not math.isfinite(x)
    if isinstance(x, dict):
        return any(has_non_finite(v) for v in x.values())
    if isinstance(x, (list, tuple)):
        return any(has_non_finite(v) for v in x)
    return False
