"""Normalize raw task-store records into ScheduledItem snapshots."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from schedule_advisor.schema import Priority, ScheduledItem, Status, TimeInterval

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30

_VALID_STATUSES = {status.value for status in Status}
_VALID_PRIORITIES = {priority.value for priority in Priority}


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; ``None`` when missing or unparsable.

    Results are always timezone-aware: naive values are read as UTC, so a
    snapshot mixing ``...Z`` and offset-less timestamps stays comparable.
    """

    if raw in (None, ""):
        return None
    if isinstance(raw, datetime):
        parsed = raw
    else:
        text = str(raw).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Unparsable timestamp %r", raw)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _nested_name(record: Mapping, key: str) -> Optional[str]:
    nested = record.get(key)
    if isinstance(nested, Mapping):
        return _text(nested.get("name"))
    return None


def _interval(record: Mapping, label: str) -> Optional[TimeInterval]:
    start = parse_timestamp(record.get("start") or record.get("dueDate"))
    if start is None:
        return None

    if record.get("end") not in (None, ""):
        # an unparsable end collapses to a zero-length interval
        return TimeInterval.clamped(start, parse_timestamp(record.get("end")))

    estimate_raw = record.get("estimatedMinutes")
    minutes = DEFAULT_DURATION_MINUTES
    if estimate_raw not in (None, ""):
        try:
            estimate = float(estimate_raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{label}: invalid estimatedMinutes") from exc
        if estimate > 0:
            minutes = estimate
    return TimeInterval.clamped(start, start + timedelta(minutes=minutes))


def item_from_record(record: Mapping, label: str) -> ScheduledItem:
    """Build one item; ``label`` prefixes error messages (``"Row 3"``, ``"Item 2"``)."""

    item_id = _text(record.get("id"))
    if item_id is None:
        raise ValueError(f"{label}: missing required fields ['id']")

    status = (_text(record.get("status")) or Status.PENDING.value).upper()
    if status not in _VALID_STATUSES:
        raise ValueError(f"{label}: invalid status '{status}'")

    priority = (_text(record.get("priority")) or Priority.MEDIUM.value).upper()
    if priority not in _VALID_PRIORITIES:
        raise ValueError(f"{label}: invalid priority '{priority}'")

    interval = _interval(record, label)
    if interval is None:
        logger.warning("%s: item %s has no usable start; excluded from day-based analyses", label, item_id)

    return ScheduledItem(
        id=item_id,
        title=_text(record.get("title")) or item_id,
        interval=interval,
        assignee=_text(record.get("assignedTo", record.get("assignee"))),
        status=Status(status),
        priority=Priority(priority),
        client_name=_text(record.get("clientName")) or _nested_name(record, "Client"),
        lead_name=_text(record.get("leadName")) or _nested_name(record, "Lead"),
    )
