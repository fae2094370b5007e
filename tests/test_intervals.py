import random
from datetime import date, datetime

from schedule_advisor.intervals import (
    GroupKey,
    assign_overlap_columns,
    format_hour,
    group_by_assignee_and_day,
    round_minutes,
)
from schedule_advisor.schema import ScheduledItem, TimeInterval


def item(item_id, start, end, assignee="ana"):
    interval = TimeInterval.clamped(datetime.fromisoformat(start), datetime.fromisoformat(end)) if start else None
    return ScheduledItem(item_id, item_id, interval, assignee=assignee)


def sample_items():
    return [
        item("b", "2025-03-03T11:00:00", "2025-03-03T12:00:00"),
        item("a", "2025-03-03T09:00:00", "2025-03-03T10:00:00"),
        item("c", "2025-03-03T09:00:00", "2025-03-03T09:30:00", assignee=None),
        item("d", "2025-03-04T08:00:00", "2025-03-04T09:00:00"),
        item("e", None, None),
    ]


def test_groups_by_assignee_and_day_sorted_by_start():
    groups = group_by_assignee_and_day(sample_items())
    assert list(groups) == [
        GroupKey("ana", date(2025, 3, 3)),
        GroupKey(None, date(2025, 3, 3)),
        GroupKey("ana", date(2025, 3, 4)),
    ]
    assert [i.id for i in groups[GroupKey("ana", date(2025, 3, 3))]] == ["a", "b"]


def test_unassigned_is_a_distinct_group():
    groups = group_by_assignee_and_day(sample_items())
    key = GroupKey(None, date(2025, 3, 3))
    assert key.is_unassigned
    assert key.label == "Unassigned"
    assert [i.id for i in groups[key]] == ["c"]


def test_grouping_ignores_input_order():
    items = sample_items()
    shuffled = list(items)
    random.Random(7).shuffle(shuffled)
    assert group_by_assignee_and_day(items) == group_by_assignee_and_day(shuffled)


def test_malformed_interval_is_clamped():
    bad = item("x", "2025-03-03T10:00:00", "2025-03-03T09:00:00")
    assert bad.duration_minutes == 0
    assert bad.start == bad.end


def test_overlap_columns():
    items = [
        item("a", "2025-03-03T09:00:00", "2025-03-03T10:00:00"),
        item("b", "2025-03-03T09:30:00", "2025-03-03T10:30:00", assignee="ben"),
        item("c", "2025-03-03T10:00:00", "2025-03-03T11:00:00"),
    ]
    slots = assign_overlap_columns(items)
    assert slots["a"].column == 0
    assert slots["b"].column == 1
    assert slots["c"].column == 0
    assert all(slot.columns == 2 for slot in slots.values())


def test_format_and_round_helpers():
    assert format_hour(9) == "09:00"
    assert format_hour(17.5) == "17:30"
    assert round_minutes(2.5) == 3
    assert round_minutes(209.4) == 209
