from datetime import datetime

from schedule_advisor.quantize import snap_datetime, snap_minutes


def test_snap_rounds_to_grid():
    assert snap_minutes(0) == 0
    assert snap_minutes(7) == 0
    assert snap_minutes(7.5) == 15
    assert snap_minutes(23) == 30
    assert snap_minutes(547.2) == 540


def test_snap_clamps_to_day():
    assert snap_minutes(-40) == 0
    assert snap_minutes(1425) == 1425
    assert snap_minutes(1439) == 1425
    assert snap_minutes(5000) == 1425


def test_snap_datetime_keeps_date():
    snapped = snap_datetime(datetime(2025, 3, 3, 9, 52, 40))
    assert snapped == datetime(2025, 3, 3, 10, 0)
