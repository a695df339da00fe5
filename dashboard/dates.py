from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    days_in_month: int
    first_day_offset: int
    label: str


def _utc_now():
    return datetime.now(timezone.utc)


def today_utc(now=None) -> str:
    """Today's UTC calendar day as ``YYYY-MM-DD``.

    Every "today" comparison in the dashboard goes through here so users in
    different timezones agree on which day a completion belongs to.
    """
    current = now or _utc_now()
    if current.tzinfo is not None:
        current = current.astimezone(timezone.utc)
    return current.date().isoformat()


def normalize_to_utc_day(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    if raw.endswith("Z") or raw.endswith("z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def iso_day(value) -> str | None:
    day = normalize_to_utc_day(value)
    return day.isoformat() if day else None


def shift_day(day_iso, days: int) -> str:
    day = normalize_to_utc_day(day_iso)
    if day is None:
        raise ValueError(f"Invalid date: {day_iso!r}")
    return (day + timedelta(days=days)).isoformat()


def days_inclusive(start, end) -> int:
    start_day = normalize_to_utc_day(start)
    end_day = normalize_to_utc_day(end)
    if start_day is None or end_day is None:
        return 0
    return (end_day - start_day).days + 1


def month_grid(view_year: int, view_month: int) -> MonthGrid:
    first = date(view_year, view_month, 1)
    days_in_month = _calendar.monthrange(view_year, view_month)[1]
    # isoweekday: Monday=1 .. Sunday=7, so Sunday-based index is isoweekday % 7
    sunday_based = first.isoweekday() % 7
    return MonthGrid(
        year=view_year,
        month=view_month,
        days_in_month=days_in_month,
        first_day_offset=(sunday_based + 6) % 7,
        label=first.strftime("%B %Y"),
    )


def shift_month(view_year: int, view_month: int, delta: int) -> tuple[int, int]:
    index = view_year * 12 + (view_month - 1) + delta
    return index // 12, index % 12 + 1


def weekday_labels() -> list[str]:
    return list(WEEKDAY_LABELS)


def last_n_days(today=None, n: int = 7) -> list[tuple[str, str]]:
    end = normalize_to_utc_day(today or today_utc())
    days = []
    for offset in range(n - 1, -1, -1):
        current = end - timedelta(days=offset)
        days.append((current.isoformat(), WEEKDAY_LABELS[current.weekday()]))
    return days
