# File: src/bizpass/main.py
"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from bizpass.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info("app.startup", message="BizPass starting up", timestamp=start_time.isoformat())

    from bizpass.api.health import set_app_start_time

    set_app_start_time(start_time)

    yield

    logger.info("app.shutdown", message="BizPass shutting down gracefully")


def _setup_middleware(app: FastAPI, environment: str, session_secret_key: str) -> None:
    """Configure all middleware in correct order."""
    from bizpass.middleware.logging import RequestIDMiddleware
    from bizpass.middleware.sentry import SentryContextMiddleware

    # Last added runs first: RequestID -> Session -> SentryContext -> app
    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret_key,
        max_age=14 * 24 * 60 * 60,
        https_only=environment == "production",
        same_site="lax",
    )
    app.add_middleware(RequestIDMiddleware)


def _mount_media(app: FastAPI) -> None:
    """Serve uploaded objects (business logos) under STORAGE_PUBLIC_URL."""
    from bizpass.core.storage import get_storage_dir

    media_dir = get_storage_dir()
    media_dir.mkdir(parents=True, exist_ok=True)
    mount_path = os.getenv("STORAGE_PUBLIC_URL", "/media").rstrip("/")
    app.mount(mount_path, StaticFiles(directory=str(media_dir)), name="media")


def _register_routers(app: FastAPI) -> None:
    """Register all API routers."""
    from bizpass.api.auth import router as auth_router
    from bizpass.api.business import router as business_router
    from bizpass.api.dashboard import router as dashboard_router
    from bizpass.api.documents import router as documents_router
    from bizpass.api.events import router as events_router
    from bizpass.api.health import router as health_router
    from bizpass.api.items import router as items_router
    from bizpass.api.passes import router as passes_router
    from bizpass.api.verify import router as verify_router

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(business_router)
    app.include_router(items_router)
    app.include_router(documents_router)
    app.include_router(events_router)
    app.include_router(passes_router)
    app.include_router(verify_router)
    app.include_router(dashboard_router)


def create_app() -> FastAPI:
    """Application factory for BizPass."""
    from bizpass.core.exception_handlers import register_exception_handlers
    from bizpass.core.sentry import init_sentry

    init_sentry()

    app = FastAPI(
        title="BizPass API",
        description="Business documents, events and verifiable entry passes",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    session_secret_key = os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production")
    environment = os.getenv("ENVIRONMENT", "development")

    _setup_middleware(app, environment, session_secret_key)
    _mount_media(app)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "bizpass.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
