"""Workload saturation detection.

Counts items per start day and per assignee and flags whatever crosses the
configured thresholds. Informational only; nothing is ever blocked on it.
"""

from __future__ import annotations

import logging
from collections import Counter

from schedule_advisor.config import ConfigInput, WorkloadThresholds, resolve_config
from schedule_advisor.schema import OverloadedDay, OverloadedUser, Priority, ScheduledItem, WorkloadReport

logger = logging.getLogger(__name__)


def day_loads(items: list[ScheduledItem]) -> Counter:
    """Item count per start day. Items without a start are not counted."""

    return Counter(item.day for item in items if item.interval is not None)


def analyze_workload(items: list[ScheduledItem], config: ConfigInput = None) -> WorkloadReport:
    """Compute overloaded days (ascending by date) and users (descending by total)."""

    thresholds = resolve_config(WorkloadThresholds, config)

    totals = day_loads(items)
    high_priority = Counter(
        item.day for item in items if item.interval is not None and item.priority == Priority.HIGH
    )
    # per-assignee counts do not need a day bucket
    user_totals = Counter(item.assignee for item in items if item.assignee)

    overloaded_days = []
    for day in sorted(totals):
        total = totals[day]
        high = high_priority[day]
        is_overloaded = total >= thresholds.tasks_per_day_overload
        is_critical = high >= thresholds.high_priority_per_day_critical
        if not is_overloaded and not is_critical:
            continue

        reasons = []
        if is_overloaded:
            reasons.append(f"{total} tasks (over limit {thresholds.tasks_per_day_overload})")
        if is_critical:
            reasons.append(f"{high} high-priority (critical limit {thresholds.high_priority_per_day_critical})")

        overloaded_days.append(
            OverloadedDay(
                date=day,
                total=total,
                high_priority_count=high,
                is_overloaded=is_overloaded,
                is_critical=is_critical,
                reason="; ".join(reasons),
            )
        )

    overloaded_users = [
        OverloadedUser(
            assignee_id=assignee,
            total=total,
            reason=f"{total} tasks (over limit {thresholds.tasks_per_user_overload})",
        )
        for assignee, total in user_totals.items()
        if total >= thresholds.tasks_per_user_overload
    ]
    overloaded_users.sort(key=lambda user: (-user.total, user.assignee_id))

    logger.debug(
        "Workload: %d overloaded day(s), %d overloaded user(s)", len(overloaded_days), len(overloaded_users)
    )
    return WorkloadReport(overloaded_days=overloaded_days, overloaded_users=overloaded_users)
