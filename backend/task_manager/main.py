"""Task Manager API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - authenticate_request runs as an app-level dependency on every API route
    - Global error handlers map TaskManagerError → {"error": ...} / {"errors": [...]}
    - CORS configured from settings and exposes X-Total-Count
    - Database initialized (and optionally seeded) on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static frontend mounted AFTER API routes so /api/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from task_manager.api.authentication import authenticate_request, get_password_hasher
from task_manager.api.error_handlers import register_error_handlers
from task_manager.api.listing import TOTAL_COUNT_HEADER
from task_manager.api.routes import auth, health, labels, task_statuses, tasks, users
from task_manager.config import get_settings
from task_manager.infrastructure.database import init_db
from task_manager.infrastructure.observability import setup_logging
from task_manager.services.seed import seed_defaults

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_all:
        await manager.create_all()
    if settings.seed_defaults:
        async with manager.session() as db:
            await seed_defaults(
                db,
                get_password_hasher(),
                admin_email=settings.admin_email,
                admin_password=settings.admin_password,
            )
            await db.commit()
    logger.info("Task Manager API started")
    yield
    await manager.dispose()
    logger.info("Task Manager API shutting down")


app = FastAPI(
    title="Task Manager API",
    version="1.0.0",
    lifespan=lifespan,
    dependencies=[Depends(authenticate_request)],
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[TOTAL_COUNT_HEADER],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(task_statuses.router)
app.include_router(labels.router)
app.include_router(tasks.router)

register_error_handlers(app)

# Static files: serves the frontend build when present (html=True: SPA fallback)
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
