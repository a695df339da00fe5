from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class HabitCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        clean = " ".join(value.split()).strip()
        if not clean:
            raise ValueError("Habit name cannot be empty")
        return clean


class HabitPatch(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


class HabitResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    created_at: str


class HabitListResponse(BaseModel):
    items: List[HabitResponse]


class LogCreate(BaseModel):
    habit_id: str
    date: dt.date
    completed: bool = True


class LogBatchCreate(BaseModel):
    items: List[LogCreate] = Field(default_factory=list)


class LogResponse(BaseModel):
    id: str
    user_id: str
    habit_id: str
    date: str
    completed: bool


class LogListResponse(BaseModel):
    items: List[LogResponse]


class LogIdsPayload(BaseModel):
    ids: List[str] = Field(default_factory=list)


class SessionResponse(BaseModel):
    user_id: str
    allowed: bool
