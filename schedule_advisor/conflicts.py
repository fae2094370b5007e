"""Conflict rule evaluation over (assignee, day) groups."""

from __future__ import annotations

import logging
from collections import defaultdict

from schedule_advisor.config import ConfigInput, ConflictRulesConfig, resolve_config
from schedule_advisor.intervals import format_hour, group_by_assignee_and_day, minutes_from_midnight
from schedule_advisor.schema import ScheduledItem, Severity, Violation, ViolationType

logger = logging.getLogger(__name__)


def _overlap_message(other: ScheduledItem) -> str:
    return f'Overlaps with "{other.title}" ({other.id})'


def _outside_hours(item: ScheduledItem, cfg: ConflictRulesConfig) -> list[Violation]:
    start_min = minutes_from_midnight(item.start)
    end_min = start_min + item.duration_minutes
    found = []
    if start_min < cfg.working_hours_start * 60:
        found.append(
            Violation(
                ViolationType.OUTSIDE_HOURS,
                Severity.WARNING,
                item.id,
                f"Starts before working hours ({format_hour(cfg.working_hours_start)})",
            )
        )
    if end_min > cfg.working_hours_end * 60:
        found.append(
            Violation(
                ViolationType.OUTSIDE_HOURS,
                Severity.WARNING,
                item.id,
                f"Ends after working hours ({format_hour(cfg.working_hours_end)})",
            )
        )
    return found


def _pair_rules(group: list[ScheduledItem], index: int, cfg: ConflictRulesConfig) -> list[Violation]:
    """Compare ``group[index]`` with later items until the first one it does not overlap."""

    a = group[index]
    found = []
    for b in group[index + 1 :]:
        if a.end <= b.start:
            gap = (b.start - a.end).total_seconds() / 60.0
            if gap < cfg.min_gap_minutes:
                found.append(
                    Violation(
                        ViolationType.IMPOSSIBLE_TIMING,
                        Severity.ERROR,
                        a.id,
                        f"No margin before next item (min {cfg.min_gap_minutes:g} min)",
                        b.id,
                    )
                )
                found.append(
                    Violation(
                        ViolationType.IMPOSSIBLE_TIMING,
                        Severity.ERROR,
                        b.id,
                        f"No margin after previous item (min {cfg.min_gap_minutes:g} min)",
                        a.id,
                    )
                )
            break
        found.append(Violation(ViolationType.OVERLAP, Severity.ERROR, a.id, _overlap_message(b), b.id))
        found.append(Violation(ViolationType.OVERLAP, Severity.ERROR, b.id, _overlap_message(a), a.id))
    return found


def evaluate_conflict_rules(items: list[ScheduledItem], config: ConfigInput = None) -> list[Violation]:
    """Evaluate overlap, margin, working-hours and daily-load rules.

    Pure and deterministic: the same snapshot and config always produce the
    same violations in the same order, whatever the input order of ``items``.
    """

    cfg = resolve_config(ConflictRulesConfig, config)
    violations: list[Violation] = []
    limit_minutes = cfg.daily_hours_limit * 60

    groups = group_by_assignee_and_day(items)
    for group in groups.values():
        for index, item in enumerate(group):
            violations.extend(_outside_hours(item, cfg))
            violations.extend(_pair_rules(group, index, cfg))

        total_minutes = sum(item.duration_minutes for item in group)
        if total_minutes > limit_minutes:
            excess_hours = (total_minutes - limit_minutes) / 60.0
            message = (
                f"Daily overload: {total_minutes / 60.0:.1f}h assigned "
                f"(limit {cfg.daily_hours_limit:g}h, +{excess_hours:.1f}h)"
            )
            violations.extend(
                Violation(ViolationType.DAILY_OVERLOAD, Severity.WARNING, item.id, message) for item in group
            )

    logger.debug("Evaluated %d group(s), found %d violation(s)", len(groups), len(violations))
    return violations


def violations_by_item_id(violations: list[Violation]) -> dict[str, list[Violation]]:
    """Index violations by item id for per-card lookup in the UI."""

    index: dict[str, list[Violation]] = defaultdict(list)
    for violation in violations:
        index[violation.item_id].append(violation)
    return dict(index)
