from fastapi import APIRouter

from orderdesk.app.api.v1.endpoints.health import router as health_router
from orderdesk.app.api.v1.endpoints.order_numbers import router as order_numbers_router
from orderdesk.app.api.v1.endpoints.stock_ledger import router as stock_ledger_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(order_numbers_router, tags=["order_numbers"])
router.include_router(stock_ledger_router, tags=["stock_ledger"])
