from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from dashboard.dates import iso_day
from dashboard.tags import clean_tags, parse_categories, serialize_categories


@dataclass
class Habit:
    id: str
    name: str
    description: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def created_day(self) -> Optional[str]:
        return iso_day(self.created_at)

    @classmethod
    def from_row(cls, row: dict) -> "Habit":
        return cls(
            id=str(row.get("id")),
            name=str(row.get("name") or ""),
            description=row.get("description"),
            categories=parse_categories(row.get("category")),
            created_at=row.get("created_at"),
            user_id=row.get("user_id"),
        )

    def to_row(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "category": serialize_categories(self.categories),
        }

    def with_categories(self, categories) -> "Habit":
        return replace(self, categories=clean_tags(categories))


@dataclass
class CompletionLog:
    id: str
    habit_id: str
    date: str
    completed: bool = True
    user_id: Optional[str] = None

    @property
    def day(self) -> Optional[str]:
        return iso_day(self.date)

    @classmethod
    def from_row(cls, row: dict) -> "CompletionLog":
        return cls(
            id=str(row.get("id")),
            habit_id=str(row.get("habit_id")),
            date=str(row.get("date") or ""),
            completed=bool(row.get("completed", True)),
            user_id=row.get("user_id"),
        )
