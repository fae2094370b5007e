"""Grouping of scheduled items by (assignee, day)."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from datetime import date, datetime
from typing import NamedTuple, Optional

from schedule_advisor.schema import ScheduledItem

logger = logging.getLogger(__name__)

UNASSIGNED_LABEL = "Unassigned"


class GroupKey(NamedTuple):
    """Bucket key. ``assignee is None`` is the unassigned group."""

    assignee: Optional[str]
    day: date

    @property
    def is_unassigned(self) -> bool:
        return self.assignee is None

    @property
    def label(self) -> str:
        return UNASSIGNED_LABEL if self.assignee is None else self.assignee

    def sort_key(self) -> tuple:
        # unassigned sorts after named assignees of the same day
        return (self.day, self.assignee is None, self.assignee or "")


class OverlapSlot(NamedTuple):
    column: int
    columns: int


def item_sort_key(item: ScheduledItem) -> tuple:
    return (item.start, item.end, item.id)


def minutes_from_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


def format_hour(hours: float) -> str:
    """9 -> "09:00", 17.5 -> "17:30"."""

    total = round_minutes(hours * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def round_minutes(value: float) -> int:
    """Round half up, so 7.5 -> 8 and 2.5 -> 3."""

    return int(math.floor(value + 0.5))


def group_by_assignee_and_day(items: list[ScheduledItem]) -> dict[GroupKey, list[ScheduledItem]]:
    """Group timed items by (assignee, start day), each group sorted by start.

    Items without a start timestamp are left out. The returned dict iterates in
    ``GroupKey.sort_key`` order so results never depend on input order.
    """

    groups: dict[GroupKey, list[ScheduledItem]] = defaultdict(list)
    skipped = 0
    for item in items:
        if item.interval is None:
            skipped += 1
            continue
        groups[GroupKey(item.assignee, item.day)].append(item)

    if skipped:
        logger.debug("Skipped %d item(s) without a start timestamp", skipped)

    return {key: sorted(groups[key], key=item_sort_key) for key in sorted(groups, key=GroupKey.sort_key)}


def group_by_day(items: list[ScheduledItem]) -> dict[date, list[ScheduledItem]]:
    """Timed items per start day, days ascending, items sorted by start."""

    days: dict[date, list[ScheduledItem]] = defaultdict(list)
    for item in items:
        if item.interval is not None:
            days[item.day].append(item)
    return {day: sorted(days[day], key=item_sort_key) for day in sorted(days)}


def assign_overlap_columns(items: list[ScheduledItem]) -> dict[str, OverlapSlot]:
    """Lay out each day's items into side-by-side columns for calendar display.

    An item takes the first column whose last item has already ended,
    otherwise it opens a new one.
    """

    slots: dict[str, OverlapSlot] = {}
    for day_items in group_by_day(items).values():
        column_ends: list[datetime] = []
        placed: list[tuple[str, int]] = []
        for item in day_items:
            column = next((i for i, end in enumerate(column_ends) if end <= item.start), None)
            if column is None:
                column = len(column_ends)
                column_ends.append(item.end)
            else:
                column_ends[column] = item.end
            placed.append((item.id, column))
        for item_id, column in placed:
            slots[item_id] = OverlapSlot(column, len(column_ends))
    return slots
