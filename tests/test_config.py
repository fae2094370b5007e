import pytest

from schedule_advisor.config import ConflictRulesConfig, OptimizerConfig, WorkloadThresholds, resolve_config


def test_defaults():
    assert resolve_config(ConflictRulesConfig) == ConflictRulesConfig(8, 9, 18, 0)
    assert resolve_config(OptimizerConfig).min_gap_minutes == 15
    assert resolve_config(WorkloadThresholds).tasks_per_user_overload == 12


def test_partial_overrides_in_either_case():
    cfg = resolve_config(ConflictRulesConfig, {"dailyHoursLimit": 6, "working_hours_end": 17})
    assert cfg.daily_hours_limit == 6
    assert cfg.working_hours_end == 17
    assert cfg.working_hours_start == 9


def test_overrides_do_not_leak_between_calls():
    resolve_config(ConflictRulesConfig, {"daily_hours_limit": 2})
    assert resolve_config(ConflictRulesConfig).daily_hours_limit == 8


def test_instance_passes_through():
    cfg = OptimizerConfig(min_gap_minutes=5)
    assert resolve_config(OptimizerConfig, cfg) is cfg


def test_invalid_overrides():
    with pytest.raises(ValueError):
        resolve_config(WorkloadThresholds, {"tasksPerWeek": 3})
    with pytest.raises(TypeError):
        resolve_config(WorkloadThresholds, 3)
