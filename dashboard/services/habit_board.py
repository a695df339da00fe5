from __future__ import annotations

import logging

from dashboard.dates import iso_day, today_utc
from dashboard.errors import ValidationError
from dashboard.overview import all_completed_today, completed_today_ids
from dashboard.tags import clean_tags, serialize_categories

logger = logging.getLogger(__name__)


def _clean_name(value) -> str:
    return " ".join(str(value or "").split()).strip()


def _clean_description(value):
    text = str(value or "").strip()
    return text or None


class HabitBoard:
    """In-memory habits and completion logs for one user session.

    User actions go through here so the local collections and the record
    store stay in step.
    """

    def __init__(self, store, today_getter=today_utc):
        self.store = store
        self.today_getter = today_getter
        self.habits = []
        self.logs = []

    @property
    def today(self) -> str:
        return self.today_getter()

    def load(self) -> "HabitBoard":
        self.habits = self.store.list_habits()
        self.logs = self.store.list_logs()
        logger.info("Loaded %s habits and %s logs", len(self.habits), len(self.logs))
        return self

    def get(self, habit_id):
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def add_habit(self, name, description=None, categories=None):
        clean_name = _clean_name(name)
        if not clean_name:
            raise ValidationError("Habit name cannot be empty")
        created = self.store.insert_habit(clean_name, _clean_description(description), clean_tags(categories))
        self.habits = self.store.list_habits()
        return created

    def save_habit_edits(self, habit_id, name, description=None, categories=None):
        clean_name = _clean_name(name)
        if not clean_name:
            raise ValidationError("Habit name cannot be empty")
        fields = {
            "name": clean_name,
            "description": _clean_description(description),
            "category": serialize_categories(categories or []),
        }
        updated = self.store.update_habit(habit_id, fields)
        self.habits = [updated if habit.id == habit_id else habit for habit in self.habits]
        return updated

    def delete_habit(self, habit_id) -> None:
        # logs go first: without a transaction a failure in between must not
        # leave orphaned logs behind
        self.store.delete_logs_for_habit(habit_id)
        self.store.delete_habit(habit_id)
        self.habits = [habit for habit in self.habits if habit.id != habit_id]
        self.logs = [log for log in self.logs if log.habit_id != habit_id]

    def find_log(self, habit_id, day):
        for log in self.logs:
            if log.habit_id == habit_id and iso_day(log.date) == day:
                return log
        return None

    def toggle(self, habit_id, day=None) -> bool:
        """Mark or unmark a habit for a day. Returns True if the day is now done."""
        today = self.today
        target = iso_day(day) if day is not None else today
        if target is None:
            raise ValidationError(f"Invalid date: {day!r}")
        if target > today:
            return False
        existing = self.find_log(habit_id, target)
        if existing is not None:
            self.store.delete_log(existing.id)
            self.logs = [log for log in self.logs if log.id != existing.id]
            return False
        self.logs = self.logs + self.store.insert_logs([(habit_id, target)])
        return True

    def toggle_all_today(self) -> None:
        if not self.habits:
            return
        today = self.today
        if all_completed_today(self.habits, self.logs, today):
            todays_ids = [log.id for log in self.logs if iso_day(log.date) == today]
            if not todays_ids:
                return
            self.store.delete_logs(todays_ids)
            self.logs = [log for log in self.logs if iso_day(log.date) != today]
            return
        done_ids = completed_today_ids(self.logs, today)
        outstanding = [habit.id for habit in self.habits if habit.id not in done_ids]
        if not outstanding:
            return
        self.logs = self.logs + self.store.insert_logs([(habit_id, today) for habit_id in outstanding])

    def replace_categories(self, habit_id, categories) -> None:
        self.habits = [
            habit.with_categories(categories) if habit.id == habit_id else habit for habit in self.habits
        ]

    async def persist_categories(self, habit_id, categories):
        return await self.store.update_habit_async(habit_id, {"category": serialize_categories(categories)})
