"""
FastAPI Application Entry Point
=============================================================================
CONCEPT: FastAPI Application Lifecycle

  1. Startup: configure logging, verify the database, create tables,
     optionally seed sample data
  2. Request handling: routers, with every failure turned into a
     structured error body by employee_service.api.errors
  3. Shutdown: dispose the connection pool

Startup and shutdown live in one `lifespan` context manager, so the engine
that startup verifies is the one shutdown disposes.

Run with: uvicorn employee_service.main:app --reload --host 0.0.0.0 --port 8000
=============================================================================
"""

import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from employee_service.api.errors import register_exception_handlers
from employee_service.api.router import api_router
from employee_service.config import settings
from employee_service.db.engine import async_session_maker, create_tables, engine
from employee_service.db.seed import seed_employees
from employee_service.observability.logging import get_logger, setup_logging
from employee_service.observability.metrics import record_request

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Everything before `yield` runs on startup, everything after on shutdown.
    """
    # === STARTUP ===
    logger.info("starting", app=settings.app_name, env=settings.app_env)

    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("database_connection_verified")

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("tables_ready")

    if settings.seed_sample_data:
        async with async_session_maker() as session:
            await seed_employees(session)

    yield

    # === SHUTDOWN ===
    logger.info("shutting_down")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description=(
        "Employee CRUD service: create, read, full and partial update, delete "
        "and search employee records."
    ),
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """
    Bind request_id / method / path into structlog's contextvars so every
    log line written while handling this request carries them.
    """
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    # An exception escaping call_next becomes a 500 from the error handler
    status_code = 500
    start = time.perf_counter()
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        record_request(request.method, status_code, duration_ms)
        logger.info(
            "request_completed",
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )


# =============================================================================
# Error handlers & routers
# =============================================================================
register_exception_handlers(app)
app.include_router(api_router)
