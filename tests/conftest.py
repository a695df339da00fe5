import asyncio
from datetime import datetime, timezone

import pytest

from dashboard.errors import PersistenceError
from dashboard.models import CompletionLog, Habit
from dashboard.tags import parse_categories

TODAY = "2024-06-10"


def make_habit(habit_id, name=None, created="2024-06-01", categories=None, description=None):
    return Habit(
        id=habit_id,
        name=name or habit_id.title(),
        description=description,
        categories=list(categories or []),
        created_at=f"{created}T08:30:00+00:00",
    )


def make_logs(habit_id, *days):
    return [CompletionLog(id=f"{habit_id}-{day}", habit_id=habit_id, date=day) for day in days]


class FakeStore:
    """In-memory stand-in for the record store client."""

    def __init__(self, habits=None, logs=None, failing_ids=()):
        self.habits = list(habits or [])
        self.logs = list(logs or [])
        self.failing_ids = set(failing_ids)
        self.calls = []
        self._counter = 0

    def _next_id(self, prefix):
        self._counter += 1
        return f"{prefix}{self._counter}"

    def list_habits(self):
        self.calls.append(("list_habits",))
        return sorted(self.habits, key=lambda habit: habit.created_at or "", reverse=True)

    def insert_habit(self, name, description=None, categories=None):
        self.calls.append(("insert_habit", name))
        habit = Habit(
            id=self._next_id("h"),
            name=name,
            description=description,
            categories=list(categories or []),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.habits.append(habit)
        return habit

    def _apply(self, habit_id, fields):
        for index, habit in enumerate(self.habits):
            if habit.id != habit_id:
                continue
            updated = Habit(
                id=habit.id,
                name=fields.get("name", habit.name),
                description=fields.get("description", habit.description),
                categories=parse_categories(fields["category"]) if "category" in fields else habit.categories,
                created_at=habit.created_at,
            )
            self.habits[index] = updated
            return updated
        raise PersistenceError("Habit not found", failed_ids=[habit_id], status_code=404)

    def update_habit(self, habit_id, fields):
        self.calls.append(("update_habit", habit_id))
        return self._apply(habit_id, fields)

    async def update_habit_async(self, habit_id, fields):
        self.calls.append(("update_habit_async", habit_id))
        await asyncio.sleep(0)
        if habit_id in self.failing_ids:
            raise PersistenceError("boom", status_code=500)
        return self._apply(habit_id, fields)

    def delete_habit(self, habit_id):
        self.calls.append(("delete_habit", habit_id))
        self.habits = [habit for habit in self.habits if habit.id != habit_id]

    def list_logs(self):
        self.calls.append(("list_logs",))
        return list(self.logs)

    def insert_logs(self, entries):
        self.calls.append(("insert_logs", list(entries)))
        created = [CompletionLog(id=self._next_id("l"), habit_id=habit_id, date=day) for habit_id, day in entries]
        self.logs.extend(created)
        return created

    def delete_log(self, log_id):
        self.calls.append(("delete_log", log_id))
        self.logs = [log for log in self.logs if log.id != log_id]

    def delete_logs_for_habit(self, habit_id):
        self.calls.append(("delete_logs_for_habit", habit_id))
        self.logs = [log for log in self.logs if log.habit_id != habit_id]

    def delete_logs(self, log_ids):
        self.calls.append(("delete_logs", list(log_ids)))
        ids = set(log_ids)
        self.logs = [log for log in self.logs if log.id not in ids]


@pytest.fixture
def today():
    return TODAY
