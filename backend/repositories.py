from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import bindparam, text as sql_text
from sqlalchemy.exc import IntegrityError

from backend.db import get_sessionmaker
from backend.db_init import HABIT_LOGS_TABLE, HABITS_TABLE

HABIT_COLUMNS = ["id", "user_id", "name", "description", "category", "created_at"]
LOG_COLUMNS = ["id", "user_id", "habit_id", "date", "completed"]
HABIT_PATCH_FIELDS = {"name", "description", "category"}


class DuplicateLogError(ValueError):
    pass


class UnknownHabitError(LookupError):
    def __init__(self, habit_ids):
        self.habit_ids = sorted(habit_ids)
        super().__init__(f"Unknown habit ids: {', '.join(self.habit_ids)}")


def _new_id() -> str:
    return uuid4().hex


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize_log_row(row) -> dict:
    payload = dict(row)
    payload["completed"] = bool(payload.get("completed"))
    day = payload.get("date")
    if day is not None and hasattr(day, "isoformat"):
        payload["date"] = day.isoformat()
    return payload


async def list_habits(user_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(HABIT_COLUMNS)}
                FROM {HABITS_TABLE}
                WHERE user_id = :user_id
                ORDER BY created_at DESC
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    return [dict(row) for row in rows]


async def get_habit(user_id: str, habit_id: str) -> dict | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(HABIT_COLUMNS)} FROM {HABITS_TABLE} "
                "WHERE id = :id AND user_id = :user_id"
            ),
            {"id": habit_id, "user_id": user_id},
        )).mappings().fetchone()
    return dict(row) if row else None


async def insert_habit(user_id: str, name: str, description: str | None, category: str | None) -> dict:
    payload = {
        "id": _new_id(),
        "user_id": user_id,
        "name": name,
        "description": description,
        "category": category,
        "created_at": _utc_now_iso(),
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {HABITS_TABLE} ({', '.join(HABIT_COLUMNS)})
                VALUES ({', '.join(f':{col}' for col in HABIT_COLUMNS)})
                """
            ),
            payload,
        )
        await session.commit()
    return payload


async def update_habit(user_id: str, habit_id: str, fields: dict) -> dict | None:
    updates = {key: value for key, value in fields.items() if key in HABIT_PATCH_FIELDS}
    if "name" in updates:
        name = " ".join(str(updates["name"] or "").split()).strip()
        if not name:
            raise ValueError("Habit name cannot be empty")
        updates["name"] = name
    if updates:
        assignments = ", ".join(f"{key} = :{key}" for key in updates)
        session_factory = get_sessionmaker()
        async with session_factory() as session:
            await session.execute(
                sql_text(
                    f"""
                    UPDATE {HABITS_TABLE}
                    SET {assignments}
                    WHERE id = :id AND user_id = :user_id
                    """
                ),
                {**updates, "id": habit_id, "user_id": user_id},
            )
            await session.commit()
    return await get_habit(user_id, habit_id)


async def delete_habit(user_id: str, habit_id: str) -> bool:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        # logs first so a failure never leaves logs pointing at a missing habit
        await session.execute(
            sql_text(f"DELETE FROM {HABIT_LOGS_TABLE} WHERE user_id = :user_id AND habit_id = :habit_id"),
            {"user_id": user_id, "habit_id": habit_id},
        )
        result = await session.execute(
            sql_text(f"DELETE FROM {HABITS_TABLE} WHERE user_id = :user_id AND id = :habit_id"),
            {"user_id": user_id, "habit_id": habit_id},
        )
        await session.commit()
    return bool(result.rowcount)


async def list_logs(user_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(LOG_COLUMNS)}
                FROM {HABIT_LOGS_TABLE}
                WHERE user_id = :user_id
                ORDER BY date
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    return [_normalize_log_row(row) for row in rows]


async def insert_logs(user_id: str, items: list[dict]) -> list[dict]:
    payloads = [
        {
            "id": _new_id(),
            "user_id": user_id,
            "habit_id": item["habit_id"],
            "date": item["date"],
            "completed": 1 if item.get("completed", True) else 0,
        }
        for item in items
    ]
    if not payloads:
        return []
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        requested = {payload["habit_id"] for payload in payloads}
        owned_stmt = sql_text(
            f"SELECT id FROM {HABITS_TABLE} WHERE user_id = :user_id AND id IN :habit_ids"
        ).bindparams(bindparam("habit_ids", expanding=True))
        owned = (await session.execute(owned_stmt, {"user_id": user_id, "habit_ids": sorted(requested)})).scalars().all()
        missing = requested - set(owned)
        if missing:
            raise UnknownHabitError(missing)
        try:
            for payload in payloads:
                await session.execute(
                    sql_text(
                        f"""
                        INSERT INTO {HABIT_LOGS_TABLE} ({', '.join(LOG_COLUMNS)})
                        VALUES ({', '.join(f':{col}' for col in LOG_COLUMNS)})
                        """
                    ),
                    payload,
                )
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            raise DuplicateLogError("Habit already logged for that day") from exc
    return [_normalize_log_row(payload) for payload in payloads]


async def delete_log(user_id: str, log_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(f"DELETE FROM {HABIT_LOGS_TABLE} WHERE user_id = :user_id AND id = :id"),
            {"user_id": user_id, "id": log_id},
        )
        await session.commit()


async def delete_logs_for_habit(user_id: str, habit_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(f"DELETE FROM {HABIT_LOGS_TABLE} WHERE user_id = :user_id AND habit_id = :habit_id"),
            {"user_id": user_id, "habit_id": habit_id},
        )
        await session.commit()


async def delete_logs(user_id: str, log_ids: list[str]) -> None:
    if not log_ids:
        return
    stmt = sql_text(
        f"DELETE FROM {HABIT_LOGS_TABLE} WHERE user_id = :user_id AND id IN :log_ids"
    ).bindparams(bindparam("log_ids", expanding=True))
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(stmt, {"user_id": user_id, "log_ids": list(log_ids)})
        await session.commit()
