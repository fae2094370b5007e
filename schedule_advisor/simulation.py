"""What-if previews of accepted moves.

Nothing here touches the task store: moves are applied to a copy of the
snapshot so their effect can be shown before a human approves them.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta
from typing import Union

from schedule_advisor.evaluator import compare
from schedule_advisor.metrics import compute_load_metrics
from schedule_advisor.schema import RedistributionMove, ScheduledItem, TimeInterval, WorkforceMove

Move = Union[RedistributionMove, WorkforceMove]


def _moved(item: ScheduledItem, move: Move) -> ScheduledItem:
    if isinstance(move, WorkforceMove):
        return replace(item, assignee=move.to_assignee)
    if item.interval is None:
        return item
    shift = timedelta(days=(move.to_day - move.from_day).days)
    return replace(item, interval=TimeInterval(item.interval.start + shift, item.interval.end + shift))


def apply_moves(items: list[ScheduledItem], moves: list[Move]) -> list[ScheduledItem]:
    """Return a new snapshot with ``moves`` applied in order."""

    by_item: dict[str, list[Move]] = {}
    for move in moves:
        by_item.setdefault(move.item_id, []).append(move)

    result = []
    for item in items:
        for move in by_item.get(item.id, []):
            item = _moved(item, move)
        result.append(item)
    return result


def update_payload(move: Move, item: ScheduledItem) -> dict:
    """Partial update ``{start?, end?, assignedTo?}`` for the task-update endpoint."""

    if isinstance(move, WorkforceMove):
        return {"assignedTo": move.to_assignee}
    moved = _moved(item, move)
    if moved.interval is None:
        return {}
    return {"start": moved.start.isoformat(), "end": moved.end.isoformat()}


def preview_moves(items: list[ScheduledItem], moves: list[Move], daily_hours_limit: float = 8) -> dict:
    """Metrics before and after applying ``moves``, plus their comparison."""

    before = compute_load_metrics(items, daily_hours_limit)
    after = compute_load_metrics(apply_moves(items, moves), daily_hours_limit)
    return {"before": before, "after": after, "comparison": compare(before, after)}
