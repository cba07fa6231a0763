"""Service test fixtures — async SQLite database, wired services, HTTP client.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - Services are wired exactly as the lifespan wires them (build_record_services)
    - The HTTP client sets app.state.records directly (ASGITransport skips lifespan)
    - db_manager patched so the readiness check sees the test database

Design Decisions:
    - File database over :memory:: concurrent sessions need separate
      connections to one database, which an in-memory pool cannot give
    - Retry delay 0 so failure-path tests stay fast
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from quotedesk.config import Settings
from quotedesk.db.base import Base
from quotedesk.infrastructure.database import DatabaseSessionManager
from quotedesk.infrastructure.fault_reporter import LoggingFaultReporter
from quotedesk.infrastructure.record_store import SqlRecordStore
from quotedesk.infrastructure.sequence_counter import SqlSequenceCounter
import quotedesk.infrastructure.database as db_module
import quotedesk.models  # noqa: F401
from quotedesk.main import app
from quotedesk.services.wiring import (
    NUMBER_FIELDS, build_numbering_policies, build_record_services,
)


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'quotedesk.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_db_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
def policies():
    return build_numbering_policies(Settings())


@pytest.fixture
def record_store(test_db_manager):
    return SqlRecordStore(test_db_manager, NUMBER_FIELDS, retry_delay_ms=0)


@pytest.fixture
def sequence_counter(test_db_manager, policies):
    return SqlSequenceCounter(test_db_manager, policies)


@pytest.fixture
def reporter():
    return LoggingFaultReporter()


@pytest.fixture
def records(record_store, sequence_counter, policies, reporter):
    """Fully wired RecordServices over the test database."""
    services = build_record_services(
        record_store, sequence_counter, policies, reporter,
    )
    yield services
    services.state.clear()


@pytest.fixture
def quote_service(records):
    return records.quotes


@pytest.fixture
def pc_service(records):
    return records.pc_numbers


@pytest.fixture
async def client(records, test_db_manager):
    """FastAPI test client bound to the wired test services."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager
    app.state.records = records

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.records = None
    db_module.db_manager = original_manager


class FailingStore:
    """RecordStore whose every operation fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error or RuntimeError("store offline")

    async def save(self, kind, record):
        raise self.error

    async def load(self, kind, record_id):
        raise self.error

    async def load_all(self, kind):
        raise self.error

    async def delete(self, kind, record_id):
        raise self.error


class FailingCounter:
    """SequenceCounter that cannot allocate."""

    async def next(self, kind):
        raise RuntimeError("counter offline")


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def failing_counter():
    return FailingCounter()
