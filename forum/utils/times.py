# forum/utils/times.py

"""
시간 관련 유틸리티 모듈입니다.

- JWT 만료 기간 단위를 초 단위로 변환합니다.
- DB에 UTC로 저장된 시각을 설정된 시간대(동쪽 오프셋)로 변환합니다.
"""

from datetime import datetime, timedelta, timezone, UTC
from typing import Optional

# 만료 단위별 초 (월 = 30일, 년 = 365일)
UNIT_SECONDS = {
    "seconds": 1,
    "minutes": 60,
    "hours": 60 * 60,
    "days": 60 * 60 * 24,
    "weeks": 60 * 60 * 24 * 7,
    "months": 60 * 60 * 24 * 30,
    "years": 60 * 60 * 24 * 365,
}


def value_to_seconds(value: int, unit: str) -> int:
    """
    (값, 단위) 쌍을 초 단위로 변환합니다.
    알 수 없는 단위이면 ValueError를 발생시킵니다.
    """
    try:
        return value * UNIT_SECONDS[unit.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown expiration unit '{unit}'. Expected one of: {', '.join(UNIT_SECONDS)}"
        )


def to_local_time(value: Optional[datetime], offset_hours: int) -> Optional[datetime]:
    """
    UTC 시각을 UTC+offset_hours 시간대로 변환합니다.
    SQLite처럼 tzinfo 없이 돌려주는 드라이버의 값은 UTC로 간주합니다.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(timezone(timedelta(hours=offset_hours)))
