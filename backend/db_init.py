from __future__ import annotations

from sqlalchemy import text as sql_text

from backend.db import get_engine

HABITS_TABLE = "habits"
HABIT_LOGS_TABLE = "habit_logs"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {HABITS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    description TEXT,
                    category TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {HABIT_LOGS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    habit_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 1
                )
                """
            )
        )
        await conn.execute(
            sql_text(f"CREATE INDEX IF NOT EXISTS idx_habits_user_created ON {HABITS_TABLE} (user_id, created_at)")
        )
        await conn.execute(
            sql_text(f"CREATE INDEX IF NOT EXISTS idx_habit_logs_user ON {HABIT_LOGS_TABLE} (user_id)")
        )
        await conn.execute(
            sql_text(
                f"CREATE UNIQUE INDEX IF NOT EXISTS idx_habit_logs_habit_date ON {HABIT_LOGS_TABLE} (habit_id, date)"
            )
        )
