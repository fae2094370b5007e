from datetime import date, datetime, timedelta

from schedule_advisor.redistribution import candidate_days, plan_redistribution
from schedule_advisor.schema import Priority, ScheduledItem, TimeInterval
from schedule_advisor.workload import analyze_workload


def item(item_id, day, priority=Priority.MEDIUM, hour=9):
    start = datetime.fromisoformat(f"{day}T{hour:02d}:00:00")
    return ScheduledItem(
        item_id, f"Task {item_id}", TimeInterval.clamped(start, start + timedelta(hours=1)), priority=priority
    )


def busy_day(day, count, prefix="x"):
    priorities = [Priority.HIGH, Priority.MEDIUM]
    return [item(f"{prefix}{i}", day, priorities[i % 2], hour=8 + i) for i in range(count)]


def test_low_priority_item_moves_to_lighter_day():
    items = busy_day("2025-03-10", 8) + [item("low", "2025-03-10", Priority.LOW, hour=16)]
    items += busy_day("2025-03-09", 5, prefix="p")
    items += busy_day("2025-03-11", 2, prefix="n")
    report = analyze_workload(items)
    assert [d.date for d in report.overloaded_days] == [date(2025, 3, 10)]

    moves = plan_redistribution(items, report.overloaded_days)
    assert moves[0].item_id == "low"
    assert moves[0].from_day == date(2025, 3, 10)
    assert moves[0].to_day == date(2025, 3, 11)
    assert moves[0].reason == "Move to Tuesday (2025-03-11) to reduce overload on 2025-03-10."


def test_moves_are_capped():
    items = busy_day("2025-03-10", 12) + busy_day("2025-03-20", 12, prefix="y")
    report = analyze_workload(items)
    assert len(plan_redistribution(items, report.overloaded_days)) == 5
    assert len(plan_redistribution(items, report.overloaded_days, {"maxSuggestions": 2})) == 2


def test_lowest_priority_first_and_one_move_per_item():
    items = busy_day("2025-03-10", 9)
    moves = plan_redistribution(items, analyze_workload(items).overloaded_days, {"max_suggestions": 9})
    ranks = [next(i for i in items if i.id == m.item_id).priority.rank for m in moves]
    assert ranks == sorted(ranks)
    assert len({m.item_id for m in moves}) == len(moves) == 9


def test_equal_distance_prefers_earlier_empty_day():
    items = busy_day("2025-03-10", 9)
    moves = plan_redistribution(items, analyze_workload(items).overloaded_days)
    assert {m.to_day for m in moves} == {date(2025, 3, 9)}


def test_equal_distance_prefers_lower_load():
    items = busy_day("2025-03-10", 9) + busy_day("2025-03-09", 3, prefix="p") + busy_day("2025-03-11", 1, prefix="n")
    moves = plan_redistribution(items, analyze_workload(items).overloaded_days)
    assert moves[0].to_day == date(2025, 3, 11)


def test_no_target_day_means_no_move():
    items = busy_day("2025-03-10", 9)
    assert plan_redistribution(items, analyze_workload(items).overloaded_days, {"load_window_days": 0}) == []


def test_overloaded_days_visited_in_date_order():
    items = busy_day("2025-03-20", 9, prefix="late") + busy_day("2025-03-10", 9, prefix="early")
    overloaded = list(reversed(analyze_workload(items).overloaded_days))
    moves = plan_redistribution(items, overloaded, {"max_suggestions": 6})
    assert [m.from_day for m in moves] == [date(2025, 3, 10)] * 6


def test_candidate_window():
    items = [item("a", "2025-03-10"), item("b", "2025-03-12")]
    days = candidate_days(items, [], 2)
    assert days[0] == date(2025, 3, 8)
    assert days[-1] == date(2025, 3, 14)
    assert len(days) == 7


def test_plan_is_deterministic():
    items = busy_day("2025-03-10", 10) + busy_day("2025-03-12", 2, prefix="n")
    overloaded = analyze_workload(items).overloaded_days
    assert plan_redistribution(items, overloaded) == plan_redistribution(list(reversed(items)), overloaded)
