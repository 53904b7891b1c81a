"""StakeThread API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StakeThreadError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, ledger state and ledger service initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - State is loaded once at startup; afterwards memory is authoritative and the
      database only receives committed change sets
    - create_all() on startup is idempotent; alembic owns schema changes in production
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stakethread.api.error_handlers import register_error_handlers
from stakethread.api.routes import (
    health, protocol, replies, threads, transactions, users,
)
from stakethread.config import get_settings
from stakethread.infrastructure.database import init_db
from stakethread.infrastructure.ledger_repository import SqlLedgerRepository
from stakethread.infrastructure.observability import setup_logging
from stakethread.services.forum_ledger import ForumLedger
from stakethread.services.ledger_service import (
    LedgerService, init_ledger_service, load_or_create_state,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db.create_all()
    repository = SqlLedgerRepository(db)
    state = await load_or_create_state(settings, repository)
    init_ledger_service(LedgerService(ForumLedger(state), repository))
    logger.info("StakeThread API started")
    yield
    logger.info("StakeThread API shutting down")
    await db.dispose()


app = FastAPI(
    title="StakeThread API", version="1.0.0", lifespan=lifespan,
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
app.include_router(transactions.router)
app.include_router(threads.router)
app.include_router(replies.router)
app.include_router(users.router)
app.include_router(protocol.router)

register_error_handlers(app)
