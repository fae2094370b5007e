"""CSV adapter for schedule snapshots."""

from __future__ import annotations

import csv

from schedule_advisor.normalize import item_from_record
from schedule_advisor.schema import ScheduledItem


def parse(file_path: str) -> list[ScheduledItem]:
    """Parse a CSV file into scheduled items.

    Columns: id, title, start, end, status, priority, assignedTo, clientName,
    leadName, estimatedMinutes. Only ``id`` is required.
    """

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        items: list[ScheduledItem] = []
        for row_number, row in enumerate(reader, start=2):
            items.append(item_from_record(row, f"Row {row_number}"))
        return items
