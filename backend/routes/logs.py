from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend import repositories
from backend.schemas import LogBatchCreate, LogIdsPayload, LogListResponse

router = APIRouter()


@router.get("/v1/logs", response_model=LogListResponse)
async def list_logs(user_id: str = Depends(require_user_id)):
    return {"items": await repositories.list_logs(user_id)}


@router.post("/v1/logs", response_model=LogListResponse, status_code=201)
async def create_logs(payload: LogBatchCreate, user_id: str = Depends(require_user_id)):
    items = [
        {"habit_id": item.habit_id, "date": item.date.isoformat(), "completed": item.completed}
        for item in payload.items
    ]
    seen = set()
    for item in items:
        key = (item["habit_id"], item["date"])
        if key in seen:
            raise HTTPException(status_code=409, detail="Habit already logged for that day")
        seen.add(key)
    try:
        created = await repositories.insert_logs(user_id, items)
    except repositories.UnknownHabitError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except repositories.DuplicateLogError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"items": created}


@router.delete("/v1/logs/{log_id}", status_code=204)
async def delete_log(log_id: str, user_id: str = Depends(require_user_id)):
    await repositories.delete_log(user_id, log_id)


@router.delete("/v1/logs", status_code=204)
async def delete_logs_for_habit(habit_id: str = Query(...), user_id: str = Depends(require_user_id)):
    await repositories.delete_logs_for_habit(user_id, habit_id)


@router.post("/v1/logs/delete", status_code=204)
async def delete_logs(payload: LogIdsPayload, user_id: str = Depends(require_user_id)):
    await repositories.delete_logs(user_id, payload.ids)
