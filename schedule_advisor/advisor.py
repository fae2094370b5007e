"""Run every analysis over one snapshot."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Optional

from schedule_advisor.config import ConflictRulesConfig, RedistributionConfig, WorkloadThresholds, resolve_config
from schedule_advisor.conflicts import evaluate_conflict_rules, violations_by_item_id
from schedule_advisor.metrics import compute_load_metrics
from schedule_advisor.redistribution import plan_redistribution
from schedule_advisor.schema import (
    RedistributionMove,
    ScheduledItem,
    Suggestion,
    Violation,
    WorkforceMove,
    WorkloadReport,
)
from schedule_advisor.suggestions import compute_suggestions
from schedule_advisor.workforce import plan_workforce_moves
from schedule_advisor.workload import analyze_workload

logger = logging.getLogger(__name__)

SECTIONS = ("conflicts", "workload", "suggestions", "redistribution", "workforce")


@dataclass
class AdvisoryReport:
    violations: list[Violation]
    violations_by_item: dict[str, list[Violation]]
    workload: WorkloadReport
    suggestions: list[Suggestion]
    redistribution: list[RedistributionMove]
    workforce: list[WorkforceMove]
    metrics: dict = field(default_factory=dict)


def _redistribution_config(config: Any, thresholds: WorkloadThresholds) -> RedistributionConfig:
    """Judge target days by the workload day threshold unless a mapping sets its own."""

    if isinstance(config, RedistributionConfig):
        return replace(config, tasks_per_day_overload=thresholds.tasks_per_day_overload)
    merged = {"tasks_per_day_overload": thresholds.tasks_per_day_overload}
    merged.update(config or {})
    return resolve_config(RedistributionConfig, merged)


def analyze_snapshot(items: list[ScheduledItem], overrides: Optional[Mapping[str, Any]] = None) -> AdvisoryReport:
    """Analyze ``items`` with optional per-analysis overrides keyed by section name."""

    overrides = dict(overrides or {})
    unknown = set(overrides) - set(SECTIONS)
    if unknown:
        raise ValueError(f"Unknown override section(s): {sorted(unknown)}")

    thresholds = resolve_config(WorkloadThresholds, overrides.get("workload"))
    violations = evaluate_conflict_rules(items, overrides.get("conflicts"))
    workload = analyze_workload(items, thresholds)
    redistribution_config = _redistribution_config(overrides.get("redistribution"), thresholds)

    rules = resolve_config(ConflictRulesConfig, overrides.get("conflicts"))
    report = AdvisoryReport(
        violations=violations,
        violations_by_item=violations_by_item_id(violations),
        workload=workload,
        suggestions=compute_suggestions(items, overrides.get("suggestions")),
        redistribution=plan_redistribution(items, workload.overloaded_days, redistribution_config),
        workforce=plan_workforce_moves(items, overrides.get("workforce")),
        metrics=compute_load_metrics(items, rules.daily_hours_limit),
    )
    logger.info(
        "Analyzed %d item(s): %d violation(s), %d suggestion(s), %d move(s)",
        len(items),
        len(report.violations),
        len(report.suggestions),
        len(report.redistribution) + len(report.workforce),
    )
    return report


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def report_to_dict(report: AdvisoryReport) -> dict:
    """JSON-ready rendering of a report (enums as values, dates as ISO strings)."""

    return _plain(asdict(report))
