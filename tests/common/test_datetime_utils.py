from datetime import timezone

import pytest

from player_attendance.common.datetime_utils import (
    business_today,
    business_yesterday,
    format_clock,
    format_duration,
    format_timestamp,
    require_iso_date,
)
from player_attendance.core.exceptions import ValidationError


def test_day_rolls_over_at_midnight_utc8(ms_at):
    # 15:59:59 UTC == 23:59:59 UTC+8
    assert business_today(ms_at(2026, 1, 31, 15, 59, 59, tz=timezone.utc)) == "2026-01-31"
    assert business_today(ms_at(2026, 1, 31, 16, 0, 0, tz=timezone.utc)) == "2026-02-01"


def test_yesterday_crosses_month_and_year(ms_at):
    assert business_yesterday(ms_at(2026, 3, 1, 0, 30)) == "2026-02-28"
    assert business_yesterday(ms_at(2026, 1, 1, 7, 0)) == "2025-12-31"


def test_offset_is_configurable(ms_at):
    now = ms_at(2026, 1, 31, 23, 0, tz=timezone.utc)
    assert business_today(now, offset_hours=0) == "2026-01-31"
    assert business_today(now, offset_hours=8) == "2026-02-01"


def test_epoch_zero_is_a_valid_instant():
    assert business_today(0) == "1970-01-01"


def test_formatting_in_business_timezone(ms_at):
    ms = ms_at(2026, 2, 1, 7, 5, 9)
    assert format_timestamp(ms) == "2026-02-01 07:05:09"
    assert format_clock(ms) == "07:05:09"
    assert format_timestamp(None) is None
    assert format_clock(None) == ""


@pytest.mark.parametrize(
    "ms, expected",
    [(0, "00:00:00"), (59_999, "00:00:59"), (3_600_000, "01:00:00"), (90_061_000, "25:01:01"), (-5, "00:00:00")],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


def test_require_iso_date():
    assert require_iso_date(" 2026-02-01 ") == "2026-02-01"
    with pytest.raises(ValidationError):
        require_iso_date("")
    with pytest.raises(ValidationError):
        require_iso_date("2026-13-01")
