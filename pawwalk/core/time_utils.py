from datetime import datetime

import pytz


def utc_now() -> datetime:
    """현재 UTC 시각 (DB 저장 형식과 같은 naive datetime)"""
    return datetime.now(pytz.UTC).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """
    timezone 정보가 있으면 UTC로 변환 후 tzinfo 제거.
    없으면 이미 UTC라고 가정합니다.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.UTC).replace(tzinfo=None)
