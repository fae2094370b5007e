"""Core data schema for schedule snapshots and derived advice."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Status(str, Enum):
    PENDING = "PENDING"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


class ViolationType(str, Enum):
    OVERLAP = "OVERLAP"
    IMPOSSIBLE_TIMING = "IMPOSSIBLE_TIMING"
    OUTSIDE_HOURS = "OUTSIDE_HOURS"
    DAILY_OVERLOAD = "DAILY_OVERLOAD"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class SuggestionType(str, Enum):
    FILL_GAP = "FILL_GAP"
    BALANCE_LOAD = "BALANCE_LOAD"
    GROUP_TASKS = "GROUP_TASKS"
    REORDER = "REORDER"
    BETTER_SCHEDULE = "BETTER_SCHEDULE"


class Difficulty(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class TimeInterval:
    """Half-open [start, end) interval. Malformed input collapses to zero duration."""

    start: datetime
    end: datetime

    @classmethod
    def clamped(cls, start: datetime, end: Optional[datetime]) -> "TimeInterval":
        if end is None:
            return cls(start, start)
        try:
            if end <= start:
                return cls(start, start)
        except TypeError:
            # naive vs aware timestamps cannot be ordered
            return cls(start, start)
        return cls(start, end)

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60.0


@dataclass(frozen=True)
class ScheduledItem:
    """Read-only view of one unit of work in the snapshot.

    ``interval`` is ``None`` when the source record had no usable start
    timestamp; such items stay out of every day-bucketed analysis.
    ``assignee`` is ``None`` for unassigned work.
    """

    id: str
    title: str
    interval: Optional[TimeInterval]
    assignee: Optional[str] = None
    status: Status = Status.PENDING
    priority: Priority = Priority.MEDIUM
    client_name: Optional[str] = None
    lead_name: Optional[str] = None

    @property
    def start(self) -> Optional[datetime]:
        return self.interval.start if self.interval else None

    @property
    def end(self) -> Optional[datetime]:
        return self.interval.end if self.interval else None

    @property
    def day(self) -> Optional[date]:
        return self.interval.start.date() if self.interval else None

    @property
    def duration_minutes(self) -> float:
        return self.interval.duration_minutes if self.interval else 0.0

    @property
    def context_label(self) -> Optional[str]:
        """Client name, falling back to lead name."""

        return self.client_name or self.lead_name or None


@dataclass(frozen=True)
class Violation:
    type: ViolationType
    severity: Severity
    item_id: str
    message: str
    # the other item of an OVERLAP or IMPOSSIBLE_TIMING pair
    related_item_id: Optional[str] = None


@dataclass(frozen=True)
class OverloadedDay:
    date: date
    total: int
    high_priority_count: int
    is_overloaded: bool
    is_critical: bool
    reason: str


@dataclass(frozen=True)
class OverloadedUser:
    assignee_id: str
    total: int
    reason: str


@dataclass(frozen=True)
class WorkloadReport:
    overloaded_days: list[OverloadedDay] = field(default_factory=list)
    overloaded_users: list[OverloadedUser] = field(default_factory=list)


@dataclass(frozen=True)
class Suggestion:
    id: str
    type: SuggestionType
    title: str
    description: str
    affected_item_ids: list[str]
    time_saved_minutes: int
    difficulty: Difficulty
    confidence: float


@dataclass(frozen=True)
class RedistributionMove:
    item_id: str
    item_title: str
    from_day: date
    to_day: date
    reason: str


@dataclass(frozen=True)
class WorkforceMove:
    item_id: str
    from_assignee: str
    to_assignee: str
    benefit_minutes: float
