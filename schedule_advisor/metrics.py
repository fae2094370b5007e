"""Snapshot load metrics."""

from __future__ import annotations

import numpy as np

from schedule_advisor.intervals import UNASSIGNED_LABEL, group_by_assignee_and_day
from schedule_advisor.schema import ScheduledItem


def load_matrix(items: list[ScheduledItem]) -> tuple[np.ndarray, list[str], list]:
    """Return (minutes[assignee, day], assignee labels, days)."""

    groups = group_by_assignee_and_day(items)
    days = sorted({key.day for key in groups})
    keys = sorted({(key.assignee is None, key.assignee or "") for key in groups})
    labels = [UNASSIGNED_LABEL if unassigned else name for unassigned, name in keys]

    row_of = {key: row for row, key in enumerate(keys)}
    col_of = {day: col for col, day in enumerate(days)}
    matrix = np.zeros((len(keys), len(days)), dtype=float)
    for key, group in groups.items():
        row = row_of[(key.assignee is None, key.assignee or "")]
        matrix[row, col_of[key.day]] = sum(item.duration_minutes for item in group)
    return matrix, labels, days


def compute_load_metrics(items: list[ScheduledItem], daily_hours_limit: float = 8) -> dict:
    """Compute total, spread and utilization metrics of scheduled minutes."""

    matrix, labels, days = load_matrix(items)
    if matrix.size == 0:
        return {
            "total_minutes": 0.0,
            "mean_daily_minutes": 0.0,
            "daily_load_std": 0.0,
            "peak_day": None,
            "utilization_by_assignee": {},
            "over_limit_cells": 0,
        }

    limit = daily_hours_limit * 60.0
    per_day = matrix.sum(axis=0)
    active_days = np.maximum((matrix > 0).sum(axis=1), 1)
    mean_active = matrix.sum(axis=1) / active_days

    return {
        "total_minutes": float(matrix.sum()),
        "mean_daily_minutes": float(per_day.mean()),
        "daily_load_std": float(per_day.std()),
        "peak_day": days[int(np.argmax(per_day))].isoformat(),
        "utilization_by_assignee": {
            label: float(value / limit) if limit else 0.0 for label, value in zip(labels, mean_active)
        },
        "over_limit_cells": int((matrix > limit).sum()),
    }
