from __future__ import annotations

from dashboard.data import api_client
from dashboard.models import CompletionLog, Habit
from dashboard.tags import serialize_categories


class HabitStore:
    """Record store client for the ``habits`` and ``habit_logs`` tables.

    Every call is scoped to the user the API client is configured for.
    """

    def __init__(self, client=api_client):
        self.client = client

    def get_session(self) -> dict:
        return self.client.request("GET", "/v1/session")

    def list_habits(self) -> list[Habit]:
        payload = self.client.request("GET", "/v1/habits") or {}
        return [Habit.from_row(row) for row in payload.get("items", [])]

    def insert_habit(self, name, description=None, categories=None) -> Habit:
        row = self.client.request(
            "POST",
            "/v1/habits",
            json={
                "name": name,
                "description": description,
                "category": serialize_categories(categories or []),
            },
        )
        return Habit.from_row(row)

    def update_habit(self, habit_id, fields: dict) -> Habit:
        row = self.client.request("PATCH", f"/v1/habits/{habit_id}", json=fields)
        return Habit.from_row(row)

    async def update_habit_async(self, habit_id, fields: dict) -> Habit:
        row = await self.client.arequest("PATCH", f"/v1/habits/{habit_id}", json=fields)
        return Habit.from_row(row)

    def delete_habit(self, habit_id) -> None:
        self.client.request("DELETE", f"/v1/habits/{habit_id}")

    def list_logs(self) -> list[CompletionLog]:
        payload = self.client.request("GET", "/v1/logs") or {}
        return [CompletionLog.from_row(row) for row in payload.get("items", [])]

    def insert_logs(self, entries) -> list[CompletionLog]:
        items = [{"habit_id": habit_id, "date": day, "completed": True} for habit_id, day in entries]
        if not items:
            return []
        payload = self.client.request("POST", "/v1/logs", json={"items": items}) or {}
        return [CompletionLog.from_row(row) for row in payload.get("items", [])]

    def delete_log(self, log_id) -> None:
        self.client.request("DELETE", f"/v1/logs/{log_id}")

    def delete_logs_for_habit(self, habit_id) -> None:
        self.client.request("DELETE", "/v1/logs", params={"habit_id": habit_id})

    def delete_logs(self, log_ids) -> None:
        ids = [str(log_id) for log_id in log_ids]
        if not ids:
            return
        self.client.request("POST", "/v1/logs/delete", json={"ids": ids})
