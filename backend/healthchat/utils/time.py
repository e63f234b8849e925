from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

__all__ = [
    "utc_now",
    "utc_iso",
]

def utc_now() -> datetime:
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)

def utc_iso(dt: Optional[datetime] = None) -> str:
    """RFC3339 / ISO8601 with trailing Z."""
    dt = dt or utc_now()
    return dt.isoformat().replace("+00:00", "Z")
