from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from orderdesk.app.core.config import Settings
from orderdesk.app.db.base import Base
from orderdesk.app.db.models import models_v1  # noqa: F401  (registers tables)
from orderdesk.app.main import create_app
from orderdesk.services.counter_store import SqlCounterStore
from orderdesk.services.order_numbers import OrderNumberGenerator
from orderdesk.services.stock_ledger import StockLedgerReconciler

FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def generator() -> OrderNumberGenerator:
    """In-memory generator whose clock is pinned to 2024-01-15 09:30 UTC."""
    gen = OrderNumberGenerator(clock=lambda: FIXED_NOW)
    yield gen
    gen.reset()


@pytest.fixture
def ledger() -> StockLedgerReconciler:
    rec = StockLedgerReconciler()
    yield rec
    rec.clear_history()


@pytest.fixture
def session_factory():
    """
    In-memory SQLite on a single shared connection (StaticPool).
    Schema is created and dropped around every test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sql_store(session_factory) -> SqlCounterStore:
    return SqlCounterStore(session_factory)


@pytest.fixture
def client(generator, ledger):
    settings = Settings(admin_token=ADMIN_TOKEN, log_level="DEBUG")
    app = create_app(settings, order_numbers=generator, stock_ledger=ledger)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Token": ADMIN_TOKEN}
