from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import require_user_id
from backend import repositories
from backend.schemas import HabitCreate, HabitListResponse, HabitPatch, HabitResponse

router = APIRouter()


@router.get("/v1/habits", response_model=HabitListResponse)
async def list_habits(user_id: str = Depends(require_user_id)):
    return {"items": await repositories.list_habits(user_id)}


@router.post("/v1/habits", response_model=HabitResponse, status_code=201)
async def create_habit(payload: HabitCreate, user_id: str = Depends(require_user_id)):
    return await repositories.insert_habit(user_id, payload.name, payload.description, payload.category)


@router.patch("/v1/habits/{habit_id}", response_model=HabitResponse)
async def update_habit(habit_id: str, payload: HabitPatch, user_id: str = Depends(require_user_id)):
    try:
        habit = await repositories.update_habit(user_id, habit_id, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit


@router.delete("/v1/habits/{habit_id}", status_code=204)
async def delete_habit(habit_id: str, user_id: str = Depends(require_user_id)):
    deleted = await repositories.delete_habit(user_id, habit_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Habit not found")
