"""Before vs after comparison of load metrics."""

from __future__ import annotations


def compare(before_metrics: dict, after_metrics: dict) -> dict:
    """Compare load metrics of two snapshots with percentage deltas."""

    def pct_change(old: float, new: float) -> float:
        if old == 0:
            return 0.0
        return ((new - old) / old) * 100.0

    return {
        "spread_reduction_pct": -pct_change(
            before_metrics.get("daily_load_std", 0.0), after_metrics.get("daily_load_std", 0.0)
        ),
        "over_limit_reduction_pct": -pct_change(
            before_metrics.get("over_limit_cells", 0), after_metrics.get("over_limit_cells", 0)
        ),
        "total_minutes_change_pct": pct_change(
            before_metrics.get("total_minutes", 0.0), after_metrics.get("total_minutes", 0.0)
        ),
    }
