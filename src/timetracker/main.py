# File: src/timetracker/main.py
"""FastAPI application factory."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timetracker.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info("app.startup", message="Time tracker starting up", timestamp=start_time.isoformat())

    from timetracker.api.health import set_app_start_time

    set_app_start_time(start_time)

    yield

    from timetracker.core.db import engine

    await engine.dispose()
    logger.info("app.shutdown", message="Time tracker shutting down gracefully")


def _setup_state(app: FastAPI) -> None:
    """Load the static accounts and settings once per process."""
    from timetracker.core.config import get_contracted_hours, load_accounts
    from timetracker.services.auth import AuthService

    auth_service = AuthService(load_accounts())
    app.state.auth_service = auth_service
    app.state.contracted_hours = get_contracted_hours()

    logger.info("auth.accounts_loaded", usernames=auth_service.usernames)


def _setup_middleware(app: FastAPI) -> None:
    """Configure all middleware in correct order."""
    from timetracker.core.config import get_cors_origins
    from timetracker.middleware.logging import RequestIDMiddleware

    # Last added = first executed: CORS wraps everything so preflights short-circuit
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=["*"],
        expose_headers=["Authorization"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register all API routers."""
    from timetracker.api.auth import router as auth_router
    from timetracker.api.health import router as health_router
    from timetracker.api.work_sessions import router as sessions_router

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(sessions_router)


def create_app() -> FastAPI:
    """Application factory for the time tracker."""
    from timetracker.core.sentry import init_sentry

    init_sentry()

    app = FastAPI(
        title="Time Tracker API",
        description="Work session timer with admin/client access",
        version="0.1.0",
        lifespan=lifespan,
    )

    from timetracker.core.exception_handlers import register_exception_handlers

    register_exception_handlers(app)

    _setup_state(app)
    _setup_middleware(app)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "timetracker.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
