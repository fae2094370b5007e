"""Snap drag/resize times to the 15-minute calendar grid."""

from __future__ import annotations

import math
from datetime import datetime

GRID_MINUTES = 15
LAST_SLOT_MINUTES = 24 * 60 - GRID_MINUTES


def snap_minutes(minutes_from_midnight: float) -> int:
    """Clamp to [0, 1425] and round to the nearest multiple of 15 (halves round up)."""

    clamped = max(0.0, min(float(LAST_SLOT_MINUTES), float(minutes_from_midnight)))
    return int(math.floor(clamped / GRID_MINUTES + 0.5)) * GRID_MINUTES


def snap_datetime(value: datetime) -> datetime:
    """Snap the time-of-day of ``value`` onto the grid, keeping its date and tzinfo."""

    minutes = snap_minutes(value.hour * 60 + value.minute + value.second / 60.0)
    return value.replace(hour=minutes // 60, minute=minutes % 60, second=0, microsecond=0)
