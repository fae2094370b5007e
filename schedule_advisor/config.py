"""Per-call analysis configuration.

Each analysis owns a frozen dataclass of defaults. Callers pass ``None``, a
partial mapping of overrides, or a full config instance; mappings are merged
over the defaults on every call and nothing is shared between calls.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, TypeVar, Union


@dataclass(frozen=True)
class ConflictRulesConfig:
    daily_hours_limit: float = 8
    working_hours_start: int = 9
    working_hours_end: int = 18
    min_gap_minutes: float = 0


@dataclass(frozen=True)
class WorkloadThresholds:
    tasks_per_day_overload: int = 8
    high_priority_per_day_critical: int = 4
    tasks_per_user_overload: int = 12


@dataclass(frozen=True)
class OptimizerConfig:
    min_gap_minutes: float = 15
    working_hours_start: int = 9
    working_hours_end: int = 18
    load_imbalance_threshold_minutes: float = 120
    # keep only REORDER when FILL_GAP and REORDER fire for the same pair
    dedupe_gap_reorder: bool = False


@dataclass(frozen=True)
class RedistributionConfig:
    max_suggestions: int = 5
    load_window_days: int = 14
    tasks_per_day_overload: int = 8


@dataclass(frozen=True)
class WorkforceConfig:
    capacity_minutes_per_day: float = 8 * 60
    max_suggestions: int = 20
    fallback_estimate_minutes: float = 30


ConfigT = TypeVar("ConfigT")
ConfigInput = Union[None, Mapping[str, Any], Any]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def resolve_config(config_type: type[ConfigT], config: ConfigInput = None) -> ConfigT:
    """Merge ``config`` over the defaults of ``config_type``.

    Mapping keys may be snake_case or camelCase (``dailyHoursLimit``).
    """

    defaults = config_type()
    if config is None:
        return defaults
    if isinstance(config, config_type):
        return config
    if not isinstance(config, Mapping):
        raise TypeError(f"Expected mapping or {config_type.__name__}, got {type(config).__name__}")

    known = {f.name for f in fields(config_type)}
    overrides = {}
    for key, value in config.items():
        name = _snake(str(key))
        if name not in known:
            raise ValueError(f"Unknown {config_type.__name__} option '{key}'")
        overrides[name] = value
    return replace(defaults, **overrides)
