from __future__ import annotations

import time
from datetime import datetime, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def time_derived_id(prefix: str) -> str:
    """Identifier from the wall clock; two calls in the same millisecond collide."""
    return f"{prefix}-{now_millis()}"
