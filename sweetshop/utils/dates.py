# sweetshop/utils/dates.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime and normalize to UTC-naive.

    - None / "" -> None
    - naive values are taken as UTC
    - "...Z" or "...+/-HH:MM" is converted to UTC and tzinfo is stripped
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def is_bare_date(value: Optional[str]) -> bool:
    return value is not None and len(str(value).strip()) == 10


def date_range_filter(column, start: Optional[str], end: Optional[str]):
    """
    Build SQLAlchemy criteria for an inclusive [start, end] range.
    A bare end day ("2025-01-31") covers that whole day.
    Raises ValueError on unparseable input.
    """
    criteria = []
    start_dt = parse_iso_datetime(start)
    end_dt = parse_iso_datetime(end)
    if start_dt is not None:
        criteria.append(column >= start_dt)
    if end_dt is not None:
        if is_bare_date(end):
            criteria.append(column < end_dt + timedelta(days=1))
        else:
            criteria.append(column <= end_dt)
    return criteria
