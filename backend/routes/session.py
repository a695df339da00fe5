from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.auth import require_user_id
from backend.schemas import SessionResponse

router = APIRouter()


@router.get("/v1/session", response_model=SessionResponse)
async def get_session(user_id: str = Depends(require_user_id)):
    return {"user_id": user_id, "allowed": True}
