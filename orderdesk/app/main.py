from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from orderdesk.app.api.v1.router import router as v1_router
from orderdesk.app.core.config import Settings, settings as default_settings
from orderdesk.app.core.logging import configure_logging
from orderdesk.app.db.models.core_types import CounterBackend
from orderdesk.services.counter_store import CounterStore, InMemoryCounterStore, SqlCounterStore
from orderdesk.services.order_numbers import OrderNumberGenerator
from orderdesk.services.stock_ledger import StockLedgerReconciler

logger = logging.getLogger(__name__)


def build_counter_store(settings: Settings) -> CounterStore:
    if settings.order_counter_backend is CounterBackend.database:
        from orderdesk.app.db.session import SessionLocal

        return SqlCounterStore(SessionLocal)
    return InMemoryCounterStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.order_numbers.dispose()
    app.state.stock_ledger.dispose()
    logger.info("Order number generator and stock ledger disposed")


def create_app(
    settings: Settings | None = None,
    *,
    order_numbers: OrderNumberGenerator | None = None,
    stock_ledger: StockLedgerReconciler | None = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    app.state.settings = settings
    # one generator and one ledger per application instance
    if order_numbers is None:
        order_numbers = OrderNumberGenerator(build_counter_store(settings))
    if stock_ledger is None:
        stock_ledger = StockLedgerReconciler()
    app.state.order_numbers = order_numbers
    app.state.stock_ledger = stock_ledger
    logger.info("Order counters backend: %s", settings.order_counter_backend.value)

    app.include_router(v1_router, prefix="/v1")
    return app


app = create_app()
