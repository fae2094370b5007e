"""Rule-based optimization suggestions, ranked by estimated impact.

No solver and no side effects: every detector reads the snapshot, emits
suggestions, and the merged list is ordered by time saved then confidence.
"""

from __future__ import annotations

import hashlib
import logging
from collections import defaultdict
from datetime import date
from typing import Optional

import numpy as np

from schedule_advisor.config import ConfigInput, OptimizerConfig, resolve_config
from schedule_advisor.intervals import (
    UNASSIGNED_LABEL,
    format_hour,
    group_by_assignee_and_day,
    group_by_day,
    item_sort_key,
    minutes_from_midnight,
    round_minutes,
)
from schedule_advisor.schema import Difficulty, ScheduledItem, Suggestion, SuggestionType

logger = logging.getLogger(__name__)


def suggestion_id(kind: SuggestionType, item_ids: list[str], day: Optional[date]) -> str:
    """Stable id from (type, sorted affected ids, day)."""

    raw = f"{kind.value}|{','.join(sorted(item_ids))}|{day.isoformat() if day else ''}"
    return "opt-" + hashlib.sha1(raw.encode("utf-8")).hexdigest()[:12]


def _make(
    kind: SuggestionType,
    day: Optional[date],
    title: str,
    description: str,
    item_ids: list[str],
    time_saved: int,
    difficulty: Difficulty,
    confidence: float,
) -> Suggestion:
    return Suggestion(
        id=suggestion_id(kind, item_ids, day),
        type=kind,
        title=title,
        description=description,
        affected_item_ids=item_ids,
        time_saved_minutes=time_saved,
        difficulty=difficulty,
        confidence=confidence,
    )


def gap_suggestions(items: list[ScheduledItem], cfg: OptimizerConfig) -> list[Suggestion]:
    """FILL_GAP for idle time between adjacent items, REORDER when the next item fits in the gap."""

    found = []
    for key, group in group_by_assignee_and_day(items).items():
        for a, b in zip(group, group[1:]):
            gap = (b.start - a.end).total_seconds() / 60.0
            if gap < cfg.min_gap_minutes:
                continue

            pair = [a.id, b.id]
            fill = _make(
                SuggestionType.FILL_GAP,
                key.day,
                "Idle gap",
                f'{round_minutes(gap)} min free between "{a.title}" and "{b.title}" could be used.',
                pair,
                round_minutes(gap),
                Difficulty.LOW,
                1.0,
            )
            if b.duration_minutes > gap:
                found.append(fill)
                continue

            if not cfg.dedupe_gap_reorder:
                found.append(fill)
            found.append(
                _make(
                    SuggestionType.REORDER,
                    key.day,
                    "Reorder to reduce waiting",
                    f'Moving "{b.title}" into the earlier gap could save up to {round_minutes(gap)} min of waiting.',
                    pair,
                    round_minutes(gap),
                    Difficulty.MEDIUM,
                    0.9,
                )
            )
    return found


def balance_suggestions(items: list[ScheduledItem], cfg: OptimizerConfig) -> list[Suggestion]:
    """BALANCE_LOAD for days where assignee minutes differ by at least the threshold."""

    per_day: dict[date, dict[Optional[str], float]] = defaultdict(lambda: defaultdict(float))
    for key, group in group_by_assignee_and_day(items).items():
        per_day[key.day][key.assignee] += sum(item.duration_minutes for item in group)

    day_items = group_by_day(items)
    found = []
    for day in sorted(per_day):
        loads = per_day[day]
        if len(loads) < 2:
            continue

        # group order puts named assignees first, unassigned last
        assignees = list(loads)
        minutes = np.array([loads[a] for a in assignees], dtype=float)
        spread = float(minutes.max() - minutes.min())
        if spread < cfg.load_imbalance_threshold_minutes:
            continue

        heavy = assignees[int(np.argmax(minutes))]
        light = assignees[int(np.argmin(minutes))]
        heavy_label = UNASSIGNED_LABEL if heavy is None else heavy
        light_label = UNASSIGNED_LABEL if light is None else light
        found.append(
            _make(
                SuggestionType.BALANCE_LOAD,
                day,
                "Load imbalance",
                f"{heavy_label}: {minutes.max() / 60.0:.1f}h · {light_label}: {minutes.min() / 60.0:.1f}h. "
                "Redistributing could balance the day.",
                [item.id for item in day_items[day]],
                round_minutes(spread / 2),
                Difficulty.HIGH,
                0.85,
            )
        )
    return found


def grouping_suggestions(items: list[ScheduledItem]) -> list[Suggestion]:
    """GROUP_TASKS for several items of the same client or lead on one day."""

    by_context: dict[tuple[date, str], list[ScheduledItem]] = defaultdict(list)
    for item in items:
        label = item.context_label
        if item.interval is None or label is None:
            continue
        by_context[(item.day, label)].append(item)

    found = []
    for day, label in sorted(by_context):
        members = sorted(by_context[(day, label)], key=item_sort_key)
        if len(members) < 2:
            continue
        found.append(
            _make(
                SuggestionType.GROUP_TASKS,
                day,
                "Group by client",
                f'{len(members)} items for "{label}" on the same day. '
                "Blocking them back to back can reduce context switches.",
                [item.id for item in members],
                15 * (len(members) - 1),
                Difficulty.MEDIUM,
                0.8,
            )
        )
    return found


def schedule_suggestions(items: list[ScheduledItem], cfg: OptimizerConfig) -> list[Suggestion]:
    """BETTER_SCHEDULE for items partly or wholly outside working hours."""

    work_start = cfg.working_hours_start * 60
    work_end = cfg.working_hours_end * 60
    window = f"{format_hour(cfg.working_hours_start)}–{format_hour(cfg.working_hours_end)}"

    found = []
    for item in sorted((i for i in items if i.interval is not None), key=item_sort_key):
        start_min = minutes_from_midnight(item.start)
        end_min = start_min + item.duration_minutes
        if start_min >= work_start and end_min <= work_end:
            continue
        found.append(
            _make(
                SuggestionType.BETTER_SCHEDULE,
                item.day,
                "Better use of working hours",
                f'"{item.title}" falls outside working hours ({window}). Moving it inside may improve planning.',
                [item.id],
                0,
                Difficulty.LOW,
                0.9,
            )
        )
    return found


def rank_suggestions(suggestions: list[Suggestion]) -> list[Suggestion]:
    """Best first: more time saved, then higher confidence. Stable for equal keys."""

    return sorted(suggestions, key=lambda s: (-s.time_saved_minutes, -s.confidence))


def compute_suggestions(items: list[ScheduledItem], config: ConfigInput = None) -> list[Suggestion]:
    """Run every detector and return the merged suggestions, best first.

    Suggestions are advice only; applying one is always the caller's decision.
    """

    cfg = resolve_config(OptimizerConfig, config)
    suggestions = (
        gap_suggestions(items, cfg)
        + balance_suggestions(items, cfg)
        + grouping_suggestions(items)
        + schedule_suggestions(items, cfg)
    )
    logger.debug("Generated %d suggestion(s)", len(suggestions))
    return rank_suggestions(suggestions)
