"""QuoteDesk API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map QuoteDeskError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, state store and record services created on startup via the
      lifespan and torn down on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Record services stored on app.state: one explicit context per app,
      resolved by api/dependencies.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quotedesk.api.error_handlers import register_error_handlers
from quotedesk.api.routes import health, pc_numbers, quotes
from quotedesk.config import get_settings
from quotedesk.infrastructure.database import init_db
from quotedesk.infrastructure.fault_reporter import LoggingFaultReporter
from quotedesk.infrastructure.observability import setup_logging
from quotedesk.infrastructure.record_store import SqlRecordStore
from quotedesk.infrastructure.sequence_counter import SqlSequenceCounter
from quotedesk.services.wiring import (
    NUMBER_FIELDS, build_numbering_policies, build_record_services,
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
    policies = build_numbering_policies(settings)
    store = SqlRecordStore(
        db, NUMBER_FIELDS,
        retry_attempts=settings.store_retry_attempts,
        retry_delay_ms=settings.store_retry_delay_ms,
    )
    app.state.records = build_record_services(
        store, SqlSequenceCounter(db, policies), policies,
        LoggingFaultReporter(),
    )
    logger.info("QuoteDesk API started")
    yield
    logger.info("QuoteDesk API shutting down")
    app.state.records.state.clear()
    app.state.records = None
    await db.close()


app = FastAPI(
    title="QuoteDesk API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router)
app.include_router(quotes.router)
app.include_router(pc_numbers.router)

register_error_handlers(app)
