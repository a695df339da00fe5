from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.db_init import init_db
from backend.routes import habits, logs, session
from backend.settings import get_settings


def create_app(initialize_db: bool = True) -> FastAPI:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if initialize_db:
            await init_db()
        yield

    app = FastAPI(title="Habit Dashboard API", version="0.1.0", lifespan=lifespan)

    app.include_router(session.router)
    app.include_router(habits.router)
    app.include_router(logs.router)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("backend").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app
