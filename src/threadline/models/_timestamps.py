from datetime import datetime, timezone


def utcnow() -> datetime:
    # Python-side default keeps microsecond precision on every backend so
    # created_at ordering is stable even for rows inserted in the same second.
    return datetime.now(timezone.utc)
