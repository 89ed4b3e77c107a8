from __future__ import annotations

import time
from datetime import datetime, timezone


def format_age(seconds: int | None) -> str:
    if seconds is None:
        return "-"
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        return f"{minutes}m{secs:02d}s"
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h{minutes:02d}m"


def format_reset(epoch_seconds: int | str | None, *, now: float | None = None) -> str:
    """Render a quota reset instant as ``<UTC timestamp> (in <age>)``."""
    if epoch_seconds is None or epoch_seconds == "":
        return "-"
    try:
        value = int(epoch_seconds)
    except (TypeError, ValueError):
        return str(epoch_seconds)
    dt = datetime.fromtimestamp(value, tz=timezone.utc)
    stamp = dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    remaining = value - int(time.time() if now is None else now)
    if remaining <= 0:
        return f"{stamp} (now)"
    return f"{stamp} (in {format_age(remaining)})"
