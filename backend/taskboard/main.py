"""Taskboard FastAPI application.

Entry point for the backend server: `uvicorn taskboard.main:app`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from taskboard.api.health import VERSION
from taskboard.api.health import router as health_router
from taskboard.api.v1.comments import router as comments_router
from taskboard.api.v1.preferences import router as preferences_router
from taskboard.api.v1.tasks import router as tasks_router
from taskboard.api.v1.users import router as users_router
from taskboard.config import settings
from taskboard.db.database import create_db_and_tables
from taskboard.models.errors import RecordInvalid

logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    create_db_and_tables()
    logger.info("Taskboard %s started (database: %s)", VERSION, settings.database_url.split("://")[0])
    yield


app = FastAPI(
    title="Taskboard",
    description="Task management API: users, tasks, comments and preferences",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RecordInvalid)
async def record_invalid_handler(request: Request, exc: RecordInvalid):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.to_sentence(), "errors": exc.errors},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Usually two concurrent creates racing for the same slug or email
    logger.warning("Integrity conflict on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content={"detail": "Conflicts with an existing record. Please retry."},
    )


# Anything unhandled becomes a generic 500
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    if isinstance(exc, HTTPException):
        raise exc
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error."},
    )


# Routes
app.include_router(health_router)
app.include_router(tasks_router)
app.include_router(users_router)
app.include_router(comments_router)
app.include_router(preferences_router)


@app.get("/")
async def root():
    return {"name": "Taskboard", "version": VERSION, "status": "running"}
