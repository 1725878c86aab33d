# tests/test_config.py

"""
설정(Settings) 검증과 시간 유틸리티에 대한 단위 테스트 모듈입니다.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from forum.core.config import Settings
from forum.utils.times import UNIT_SECONDS, to_local_time, value_to_seconds


# =============================================================================
# 1. value_to_seconds
# =============================================================================
@pytest.mark.parametrize(
    "value, unit, expected",
    [
        (30, "seconds", 30),
        (5, "minutes", 300),
        (2, "hours", 7200),
        (7, "days", 604800),
        (1, "weeks", 604800),
        (1, "months", 2592000),
        (1, "years", 31536000),
        (3, "Days", 259200),
    ],
)
def test_value_to_seconds(value, unit, expected):
    assert value_to_seconds(value, unit) == expected


def test_value_to_seconds_unknown_unit():
    with pytest.raises(ValueError, match="fortnights"):
        value_to_seconds(1, "fortnights")


def test_unit_table_is_increasing():
    seconds = list(UNIT_SECONDS.values())
    assert seconds == sorted(seconds)


# =============================================================================
# 2. to_local_time
# =============================================================================
def test_to_local_time_treats_naive_as_utc():
    naive = datetime(2024, 1, 1, 15, 0, 0)
    local = to_local_time(naive, 9)

    assert local.utcoffset() == timedelta(hours=9)
    assert (local.year, local.month, local.day, local.hour) == (2024, 1, 2, 0)


def test_to_local_time_converts_aware_value():
    aware = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    local = to_local_time(aware, -5)

    assert local.hour == 5
    assert local == aware


def test_to_local_time_none():
    assert to_local_time(None, 9) is None


# =============================================================================
# 3. Settings
# =============================================================================
def test_settings_expiration_seconds():
    s = Settings(_env_file=None, JWT_EXPIRATION_VALUE=2, JWT_EXPIRATION_UNIT="Hours")

    assert s.JWT_EXPIRATION_UNIT == "hours"
    assert s.JWT_EXPIRATION_SECONDS == 7200


def test_settings_rejects_unknown_expiration_unit():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_EXPIRATION_UNIT="fortnights")


def test_settings_rejects_non_positive_expiration():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_EXPIRATION_VALUE=0)


@pytest.mark.parametrize("offset", [-13, 15])
def test_settings_rejects_out_of_range_offset(offset):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, TZ_EAST_OFFSET_IN_HOURS=offset)


def test_settings_normalizes_log_level():
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_settings_reads_environment():
    """conftest.py에서 설정한 환경 변수가 반영됩니다."""
    s = Settings(_env_file=None)

    assert s.TZ_EAST_OFFSET_IN_HOURS == 9
    assert s.JWT_SECRET.get_secret_value() == "test-secret-key"
    assert s.BACKEND_PORT == 8000
