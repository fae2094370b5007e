"""Suggest moving low-priority items off overloaded days.

Greedy and local on purpose: each item goes to the nearest day with a lower
item count, measured on the snapshot as it was before any proposed move.
Applying several moves without re-running the analysis can therefore pile
them onto the same target day.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date, timedelta
from typing import Optional

from schedule_advisor.config import ConfigInput, RedistributionConfig, resolve_config
from schedule_advisor.intervals import group_by_day
from schedule_advisor.schema import OverloadedDay, RedistributionMove, ScheduledItem
from schedule_advisor.workload import day_loads

logger = logging.getLogger(__name__)


def candidate_days(items: list[ScheduledItem], overloaded_days: list[OverloadedDay], window_days: int) -> list[date]:
    """Every date in the snapshot's span, widened by ``window_days`` on each side."""

    known = {item.day for item in items if item.interval is not None}
    known.update(od.date for od in overloaded_days)
    if not known:
        return []

    first = min(known) - timedelta(days=window_days)
    last = max(known) + timedelta(days=window_days)
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def nearest_lower_load_day(
    from_day: date,
    from_load: int,
    loads: Counter,
    overloaded: set[date],
    overload_threshold: int,
    candidates: list[date],
) -> Optional[date]:
    """Closest day whose load is strictly below ``from_load``.

    Ties go to the lower load, then to a day that is not overloaded, then to
    the earlier date.
    """

    best_key = None
    best_day = None
    for day in candidates:
        if day == from_day:
            continue
        load = loads.get(day, 0)
        if load >= from_load:
            continue
        is_overloaded = day in overloaded or load >= overload_threshold
        key = (abs((day - from_day).days), load, is_overloaded, day)
        if best_key is None or key < best_key:
            best_key, best_day = key, day
    return best_day


def plan_redistribution(
    items: list[ScheduledItem],
    overloaded_days: list[OverloadedDay],
    config: ConfigInput = None,
) -> list[RedistributionMove]:
    """Propose at most ``max_suggestions`` moves, lowest priority first.

    An item with no eligible target day is simply left out.
    """

    cfg = resolve_config(RedistributionConfig, config)
    if not overloaded_days or cfg.max_suggestions <= 0:
        return []

    loads = day_loads(items)
    overloaded = {od.date for od in overloaded_days}
    candidates = candidate_days(items, overloaded_days, cfg.load_window_days)
    by_day = group_by_day(items)

    moves: list[RedistributionMove] = []
    suggested: set[str] = set()
    for od in sorted(overloaded_days, key=lambda d: d.date):
        day_items = sorted(by_day.get(od.date, []), key=lambda item: item.priority.rank)
        for item in day_items:
            if len(moves) >= cfg.max_suggestions:
                break
            if item.id in suggested:
                continue
            target = nearest_lower_load_day(
                od.date, od.total, loads, overloaded, cfg.tasks_per_day_overload, candidates
            )
            if target is None:
                continue

            suggested.add(item.id)
            moves.append(
                RedistributionMove(
                    item_id=item.id,
                    item_title=item.title,
                    from_day=od.date,
                    to_day=target,
                    reason=f"Move to {target:%A} ({target.isoformat()}) to reduce overload on {od.date.isoformat()}.",
                )
            )

    logger.debug("Proposed %d redistribution move(s) for %d overloaded day(s)", len(moves), len(overloaded_days))
    return moves
