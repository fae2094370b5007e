"""Workforce redistribution: reassign pending work from assignees over capacity."""

from __future__ import annotations

import logging
from collections import defaultdict

from schedule_advisor.config import ConfigInput, WorkforceConfig, resolve_config
from schedule_advisor.schema import ScheduledItem, Status, WorkforceMove

logger = logging.getLogger(__name__)


def _estimate(item: ScheduledItem, cfg: WorkforceConfig) -> float:
    return item.duration_minutes if item.duration_minutes > 0 else cfg.fallback_estimate_minutes


def span_days(items: list[ScheduledItem]) -> int:
    days = [item.day for item in items if item.interval is not None]
    if not days:
        return 1
    return (max(days) - min(days)).days + 1


def plan_workforce_moves(items: list[ScheduledItem], config: ConfigInput = None) -> list[WorkforceMove]:
    """Suggest reassignments, lowest priority first. Never assigns anything itself."""

    cfg = resolve_config(WorkforceConfig, config)
    pending = [item for item in items if item.status == Status.PENDING and item.assignee]
    capacity = cfg.capacity_minutes_per_day * span_days(pending)

    load: dict[str, float] = defaultdict(float)
    by_assignee: dict[str, list[ScheduledItem]] = defaultdict(list)
    for item in pending:
        load[item.assignee] += _estimate(item, cfg)
        by_assignee[item.assignee].append(item)

    overloaded = sorted((a for a in load if load[a] > capacity), key=lambda a: (-load[a], a))
    receivers = sorted(a for a in load if load[a] < capacity)
    if not overloaded or not receivers:
        return []

    moves: list[WorkforceMove] = []
    for donor in overloaded:
        overflow = load[donor] - capacity
        queue = sorted(
            by_assignee[donor],
            key=lambda item: (item.priority.rank, item.start is None, item.start or 0, item.id),
        )
        for item in queue:
            if len(moves) >= cfg.max_suggestions or overflow <= 0:
                break
            estimate = _estimate(item, cfg)

            target = None
            best_spare = -1.0
            for receiver in receivers:
                spare = capacity - load[receiver]
                if spare >= estimate and spare > best_spare:
                    target, best_spare = receiver, spare
            if target is None:
                continue

            moves.append(
                WorkforceMove(item_id=item.id, from_assignee=donor, to_assignee=target, benefit_minutes=estimate)
            )
            overflow -= estimate
            load[target] += estimate
            if load[target] >= capacity:
                receivers.remove(target)

    logger.debug("Proposed %d workforce move(s) at capacity %.0f min", len(moves), capacity)
    return moves
