from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from dashboard.constants import (
    CATEGORY_FILTER_ALL,
    CATEGORY_FILTER_UNCATEGORIZED,
    OVERVIEW_WINDOW_DAYS,
    RECENT_ACTIVITY_LIMIT,
)
from dashboard.dates import iso_day, month_grid, today_utc
from dashboard.stats import CompletionSetting, habit_stats, round_half_up


@dataclass(frozen=True)
class Overview:
    total: int
    completed_today: int
    completion_today: int
    longest_streak: int
    avg_completion: int


@dataclass(frozen=True)
class DayCell:
    label: int
    iso: str
    active_count: int
    completed_count: int
    complete_all: bool
    is_future: bool
    is_today: bool

    @property
    def status(self) -> str:
        if self.is_future or self.active_count == 0:
            return "neutral"
        if self.complete_all:
            return "complete"
        if self.completed_count > 0:
            return "partial"
        return "none"


def completed_pairs(logs) -> set:
    pairs = set()
    for log in logs:
        if not log.completed:
            continue
        day = iso_day(log.date)
        if day is not None:
            pairs.add((log.habit_id, day))
    return pairs


def is_completed_on(logs, habit_id, day) -> bool:
    return (habit_id, iso_day(day)) in completed_pairs(logs)


def completed_today_ids(logs, today=None) -> set:
    today_iso = today or today_utc()
    return {habit_id for habit_id, day in completed_pairs(logs) if day == today_iso}


def is_active_on(habit, day_iso) -> bool:
    created = habit.created_day
    return created is not None and created <= day_iso


def overview(habits, logs, today=None) -> Overview:
    today_iso = today or today_utc()
    total = len(habits)
    done_ids = completed_today_ids(logs, today_iso)
    completed_today = sum(1 for habit in habits if habit.id in done_ids)
    setting = CompletionSetting("window", OVERVIEW_WINDOW_DAYS)
    stats = [habit_stats(habit, logs, setting, today_iso, clamp_to_age=False) for habit in habits]
    longest = max((item.streak for item in stats), default=0)
    avg_completion = 0
    if stats:
        avg_completion = round_half_up(sum(item.completion for item in stats) / len(stats))
    return Overview(
        total=total,
        completed_today=completed_today,
        completion_today=0 if total == 0 else round_half_up(completed_today / total * 100),
        longest_streak=longest,
        avg_completion=avg_completion,
    )


def all_completed_today(habits, logs, today=None) -> bool:
    done_ids = completed_today_ids(logs, today)
    return bool(habits) and all(habit.id in done_ids for habit in habits)


def _day_cell(habits, pairs, day_iso, label, today_iso) -> DayCell:
    active = [habit for habit in habits if is_active_on(habit, day_iso)]
    completed_count = sum(1 for habit in active if (habit.id, day_iso) in pairs)
    return DayCell(
        label=label,
        iso=day_iso,
        active_count=len(active),
        completed_count=completed_count,
        complete_all=bool(active) and completed_count == len(active),
        is_future=day_iso > today_iso,
        is_today=day_iso == today_iso,
    )


def day_aggregate(habits, logs, day, today=None) -> DayCell | None:
    day_iso = iso_day(day)
    if day_iso is None:
        return None
    return _day_cell(habits, completed_pairs(logs), day_iso, int(day_iso[8:10]), today or today_utc())


def month_days(habits, logs, view_year, view_month, today=None) -> list[DayCell]:
    today_iso = today or today_utc()
    grid = month_grid(view_year, view_month)
    pairs = completed_pairs(logs)
    cells = []
    for day_number in range(1, grid.days_in_month + 1):
        day_iso = date(view_year, view_month, day_number).isoformat()
        cells.append(_day_cell(habits, pairs, day_iso, day_number, today_iso))
    return cells


def selected_day_habits(habits, logs, day) -> list[tuple]:
    day_iso = iso_day(day)
    if day_iso is None:
        return []
    pairs = completed_pairs(logs)
    return [(habit, (habit.id, day_iso) in pairs) for habit in habits if is_active_on(habit, day_iso)]


def filtered_habits(habits, logs, status_filter="all", category_filter=CATEGORY_FILTER_ALL, query="", today=None):
    done_ids = completed_today_ids(logs, today)
    if status_filter == "completed":
        base = [habit for habit in habits if habit.id in done_ids]
    elif status_filter == "pending":
        base = [habit for habit in habits if habit.id not in done_ids]
    else:
        base = list(habits)

    if category_filter == CATEGORY_FILTER_UNCATEGORIZED:
        base = [habit for habit in base if not habit.categories]
    elif category_filter and category_filter != CATEGORY_FILTER_ALL:
        base = [habit for habit in base if category_filter in habit.categories]

    if not (query or "").strip():
        return base
    needle = query.lower()
    return [
        habit
        for habit in base
        if needle in habit.name.lower()
        or needle in (habit.description or "").lower()
        or needle in " ".join(habit.categories).lower()
    ]


def ordered_habits(habits, habit_order) -> list:
    positions = {}
    for index, habit_id in enumerate(habit_order or []):
        positions.setdefault(habit_id, index)
    # sorted() is stable, so unknown ids keep their relative order at the end
    return sorted(habits, key=lambda habit: positions.get(habit.id, math.inf))


def reconcile_order(habit_order, habits) -> list[str]:
    ids = [habit.id for habit in habits]
    known = set(ids)
    existing = []
    for habit_id in habit_order or []:
        if habit_id in known and habit_id not in existing:
            existing.append(habit_id)
    return existing + [habit_id for habit_id in ids if habit_id not in existing]


def _base_order(habit_order, habits):
    if habit_order:
        return [habit_id for habit_id in habit_order if habit_id]
    return [habit.id for habit in habits]


def move_habit(habit_order, habits, habit_id, direction) -> list[str]:
    base = _base_order(habit_order, habits)
    if habit_id not in base:
        return base
    index = base.index(habit_id)
    target = max(0, index - 1) if direction == "up" else min(len(base) - 1, index + 1)
    if target == index:
        return base
    base[index], base[target] = base[target], base[index]
    return base


def reorder_habit(habit_order, habits, source_id, target_id, position="before") -> list[str]:
    base = _base_order(habit_order, habits)
    if not source_id or not target_id or source_id == target_id:
        return base
    if source_id not in base or target_id not in base:
        return base
    src_index = base.index(source_id)
    target_index = base.index(target_id)
    base.pop(src_index)
    if position == "after":
        insert_at = target_index + (0 if src_index < target_index else 1)
    else:
        insert_at = target_index
    base.insert(min(len(base), insert_at), source_id)
    return base


def recent_activity(logs, habits, limit=RECENT_ACTIVITY_LIMIT) -> list[dict]:
    names = {habit.id: habit.name for habit in habits}
    ordered = sorted(logs, key=lambda log: str(log.date), reverse=True)
    return [
        {
            "id": log.id,
            "habit_id": log.habit_id,
            "date": log.date,
            "habit_name": names.get(log.habit_id, "Unknown habit"),
        }
        for log in ordered[:limit]
    ]
