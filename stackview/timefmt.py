from __future__ import annotations

from datetime import datetime, timezone

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def elapsed(now: int, timestamp: int) -> str:
    seconds = now - timestamp
    if seconds < MINUTE:
        return "just now"
    if seconds < HOUR:
        return _plural(seconds // MINUTE, "minute")
    if seconds < DAY:
        return _plural(seconds // HOUR, "hour")
    days = seconds // DAY
    if days < 30:
        return _plural(days, "day")
    if days < 365:
        return _plural(days // 30, "month")
    return _plural(days // 365, "year")


def timestamp_to_elapsed(timestamp: int) -> str:
    return elapsed(int(now_utc().timestamp()), timestamp)
