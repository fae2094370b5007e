from datetime import date, datetime, timedelta

from schedule_advisor.evaluator import compare
from schedule_advisor.metrics import compute_load_metrics
from schedule_advisor.schema import RedistributionMove, ScheduledItem, TimeInterval, WorkforceMove
from schedule_advisor.simulation import apply_moves, preview_moves, update_payload


def item(item_id, start, hours, assignee="ana"):
    begin = datetime.fromisoformat(start)
    return ScheduledItem(item_id, item_id, TimeInterval.clamped(begin, begin + timedelta(hours=hours)), assignee=assignee)


def snapshot():
    return [
        item("a", "2025-03-03T09:00:00", 6),
        item("b", "2025-03-03T15:00:00", 4),
        item("c", "2025-03-04T09:00:00", 1, assignee="ben"),
    ]


def test_metrics_summary():
    metrics = compute_load_metrics(snapshot())
    assert metrics["total_minutes"] == 660
    assert metrics["peak_day"] == "2025-03-03"
    assert metrics["over_limit_cells"] == 1
    assert metrics["utilization_by_assignee"]["ana"] == 600 / 480


def test_metrics_empty_snapshot():
    assert compute_load_metrics([])["total_minutes"] == 0.0


def test_apply_day_move_keeps_time_of_day():
    move = RedistributionMove("b", "b", date(2025, 3, 3), date(2025, 3, 5), "reason")
    items = snapshot()
    moved = apply_moves(items, [move])
    assert moved[1].start == datetime(2025, 3, 5, 15, 0)
    assert items[1].start == datetime(2025, 3, 3, 15, 0)


def test_update_payloads():
    items = snapshot()
    day_move = RedistributionMove("b", "b", date(2025, 3, 3), date(2025, 3, 4), "reason")
    assert update_payload(day_move, items[1]) == {
        "start": "2025-03-04T15:00:00",
        "end": "2025-03-04T19:00:00",
    }
    assign_move = WorkforceMove("b", "ana", "ben", 240)
    assert update_payload(assign_move, items[1]) == {"assignedTo": "ben"}


def test_preview_reports_reduced_overload():
    preview = preview_moves(snapshot(), [WorkforceMove("b", "ana", "ben", 240)])
    assert preview["before"]["over_limit_cells"] == 1
    assert preview["after"]["over_limit_cells"] == 0
    assert preview["comparison"]["over_limit_reduction_pct"] == 100.0


def test_compare_deltas():
    result = compare(
        {"daily_load_std": 100.0, "over_limit_cells": 4, "total_minutes": 600.0},
        {"daily_load_std": 80.0, "over_limit_cells": 2, "total_minutes": 600.0},
    )
    assert round(result["spread_reduction_pct"], 2) == 20.0
    assert round(result["over_limit_reduction_pct"], 2) == 50.0
    assert result["total_minutes_change_pct"] == 0.0
