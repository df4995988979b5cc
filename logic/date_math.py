"""Fail-soft date interval arithmetic used by the analytics layer.

Malformed input never raises: interval helpers fall back to ``0`` so callers
always get a displayable number.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

ONE_DAY = timedelta(days=1)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse ``datetime``/``date``/ISO-8601 input into an aware UTC-based datetime.

    Date-only strings resolve to midnight UTC and a trailing ``Z`` is accepted.
    Returns ``None`` when the value cannot be interpreted.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if not text:
            return None
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_now(now: datetime | None = None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def days_between(start: Any, end: Any) -> int:
    """Whole days from ``start`` to ``end`` (floored); ``0`` if either is malformed."""

    start_at = parse_timestamp(start)
    end_at = parse_timestamp(end)
    if start_at is None or end_at is None:
        return 0
    return (end_at - start_at) // ONE_DAY


def days_since(value: Any, now: datetime | None = None) -> int:
    """Whole days elapsed since ``value`` (floored); ``0`` if malformed."""

    then = parse_timestamp(value)
    if then is None:
        return 0
    return (resolve_now(now) - then) // ONE_DAY


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


__all__ = ["parse_timestamp", "resolve_now", "days_between", "days_since", "utc_now_iso"]
