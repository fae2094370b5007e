"""Demo script for schedule-advisor."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from schedule_advisor.adapters.csv_adapter import parse
from schedule_advisor.advisor import analyze_snapshot
from schedule_advisor.simulation import preview_moves


def main() -> None:
    items = parse("examples/sample_snapshot.csv")
    report = analyze_snapshot(items)
    print("Violations:", len(report.violations))
    for day in report.workload.overloaded_days:
        print("Overloaded:", day.date, day.reason)
    for suggestion in report.suggestions[:5]:
        print("Suggestion:", suggestion.type.value, suggestion.time_saved_minutes, suggestion.title)
    for move in report.redistribution:
        print("Move:", move.item_id, move.reason)
    print("Preview:", preview_moves(items, report.redistribution)["comparison"])


if __name__ == "__main__":
    main()
