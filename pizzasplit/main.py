"""PizzaSplit API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PizzaSplitError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main.py only wires things up
    - SQLite databases get their schema created on startup; Postgres is migrated
      with alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pizzasplit.api.error_handlers import register_error_handlers
from pizzasplit.infrastructure.database import init_db
from pizzasplit.infrastructure.observability import setup_logging
from pizzasplit.config import get_settings
from pizzasplit.api.routes import health, schemes, calculations, orders

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
    if settings.database_url.startswith("sqlite"):
        await manager.create_schema()
    logger.info("PizzaSplit API started")
    yield
    await manager.dispose()
    logger.info("PizzaSplit API shutting down")


app = FastAPI(
    title="PizzaSplit API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(schemes.router)
app.include_router(calculations.router)
app.include_router(orders.router)

register_error_handlers(app)
