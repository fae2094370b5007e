"""JSON adapter for schedule snapshots."""

from __future__ import annotations

import json
from collections.abc import Mapping

from schedule_advisor.normalize import item_from_record
from schedule_advisor.schema import ScheduledItem


def parse(file_path: str) -> list[ScheduledItem]:
    """Parse a JSON list of task records into scheduled items."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    items = []
    for index, record in enumerate(payload, start=1):
        if not isinstance(record, Mapping):
            raise ValueError(f"Item {index}: expected an object")
        items.append(item_from_record(record, f"Item {index}"))
    return items
