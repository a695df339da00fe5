from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache

from dashboard.constants import (
    COMPLETION_MODES,
    DEFAULT_COMPLETION_DAYS,
    DEFAULT_COMPLETION_MODE,
    STREAK_LOOKBACK_DAYS,
)
from dashboard.dates import days_inclusive, normalize_to_utc_day, today_utc
from dashboard.errors import ValidationError


@dataclass(frozen=True)
class CompletionSetting:
    mode: str = DEFAULT_COMPLETION_MODE
    days: int = DEFAULT_COMPLETION_DAYS

    def __post_init__(self):
        if self.mode not in COMPLETION_MODES:
            raise ValidationError(f"Unknown completion mode: {self.mode}")

    def clamped(self, days_since_creation=None) -> "CompletionSetting":
        try:
            days = int(self.days)
        except (TypeError, ValueError):
            days = DEFAULT_COMPLETION_DAYS
        days = max(days, 1)
        if days_since_creation is not None:
            days = min(days, max(int(days_since_creation), 1))
        return CompletionSetting(self.mode, days)


@dataclass(frozen=True)
class HabitStats:
    streak: int
    completion: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_streak(completed_days, today) -> int:
    """Trailing streak over the last seven days ending today.

    A missing today never breaks the streak. An earlier missing day ends the
    walk only once at least one completed day has been counted, so the walk
    can pass over leading gaps before the streak starts.
    """
    end = normalize_to_utc_day(today)
    streak = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        current = end - timedelta(days=offset)
        if current in completed_days:
            streak += 1
            continue
        if offset == 0:
            continue
        if streak > 0:
            break
    return streak


def completion_window(created_day, setting: CompletionSetting, today) -> tuple[date, date]:
    end = normalize_to_utc_day(today)
    created = normalize_to_utc_day(created_day)
    if setting.mode == "lifetime":
        return (created if created is not None else end), end
    days = setting.clamped().days
    return end - timedelta(days=days - 1), end


def completion_percentage(completed_days, start: date, end: date) -> int:
    total_days = max((end - start).days + 1, 1)
    completed = sum(1 for day in completed_days if start <= day <= end)
    return max(0, min(100, round_half_up(100 * completed / total_days)))


@lru_cache(maxsize=2048)
def _stats_for(created_iso, completed_days: frozenset, mode: str, days: int, today_iso: str) -> HabitStats:
    setting = CompletionSetting(mode, days)
    start, end = completion_window(created_iso, setting, today_iso)
    return HabitStats(
        streak=compute_streak(completed_days, today_iso),
        completion=completion_percentage(completed_days, start, end),
    )


def completed_days_for(habit_id, logs) -> frozenset:
    days = set()
    for log in logs:
        if log.habit_id != habit_id or not log.completed:
            continue
        day = normalize_to_utc_day(log.date)
        if day is not None:
            days.add(day)
    return frozenset(days)


def habit_stats(habit, logs, setting: CompletionSetting | None = None, today=None, clamp_to_age=True) -> HabitStats:
    """Streak and completion for one habit.

    With ``clamp_to_age`` the window never reaches back past the creation day.
    The overview average passes ``False`` to measure every habit over the same
    fixed window.
    """
    setting = setting or CompletionSetting()
    today_iso = today or today_utc()
    if clamp_to_age and habit.created_day is not None:
        setting = setting.clamped(days_since_creation(habit, today_iso))
    return _stats_for(
        habit.created_day,
        completed_days_for(habit.id, logs),
        setting.mode,
        setting.clamped().days,
        today_iso,
    )


def days_since_creation(habit, today=None) -> int:
    created = habit.created_day
    if created is None:
        return 1
    return max(days_inclusive(created, today or today_utc()), 1)
