from __future__ import annotations

from fastapi import APIRouter, Depends

from orderdesk.app.api.deps import get_stock_ledger, require_admin
from orderdesk.app.schemas.stock_ledger import (
    ExpectedStockRead,
    ReconciliationRead,
    StockOperationCreate,
    StockOperationRead,
    StockValidateRequest,
)
from orderdesk.services.stock_ledger import StockLedgerReconciler, StockOperation

router = APIRouter(prefix="/stock-ledger")


def _to_read(op: StockOperation) -> StockOperationRead:
    return StockOperationRead(
        product_id=op.product_id,
        operation=op.kind,
        quantity=op.quantity,
        timestamp=op.timestamp,
        order_id=op.order_id,
    )


@router.post("/operations", response_model=StockOperationRead, status_code=201)
def record_operation(
    payload: StockOperationCreate,
    ledger: StockLedgerReconciler = Depends(get_stock_ledger),
):
    fields = payload.model_dump(exclude_none=True)
    op = StockOperation(**fields)
    ledger.record_operation(op)
    return _to_read(op)


@router.get("/operations", response_model=list[StockOperationRead])
def list_operations(ledger: StockLedgerReconciler = Depends(get_stock_ledger)):
    return [_to_read(op) for op in ledger.all_operations()]


@router.delete("/operations", dependencies=[Depends(require_admin)])
def clear_operations(ledger: StockLedgerReconciler = Depends(get_stock_ledger)):
    ledger.clear_history()
    return {"ok": True}


@router.get("/products/{product_id}/operations", response_model=list[StockOperationRead])
def list_product_operations(
    product_id: str,
    ledger: StockLedgerReconciler = Depends(get_stock_ledger),
):
    return [_to_read(op) for op in ledger.operations_for(product_id)]


@router.get("/products/{product_id}/expected", response_model=ExpectedStockRead)
def get_expected_stock(
    product_id: str,
    initial_stock: float = 0,
    ledger: StockLedgerReconciler = Depends(get_stock_ledger),
):
    return {
        "product_id": product_id,
        "initial_stock": initial_stock,
        "expected_stock": ledger.expected_stock(product_id, initial_stock),
    }


@router.post("/products/{product_id}/validate", response_model=ReconciliationRead)
def validate_stock(
    product_id: str,
    payload: StockValidateRequest,
    ledger: StockLedgerReconciler = Depends(get_stock_ledger),
):
    """
    Reconcile reported stock against the ledger (diagnostic, never rejects).
    - is_valid: |reported - expected| < 0.01
    """
    result = ledger.validate(product_id, payload.reported_stock, payload.initial_stock)
    return ReconciliationRead(
        product_id=result.product_id,
        is_valid=result.is_valid,
        expected_stock=result.expected_stock,
        reported_stock=result.reported_stock,
        difference=result.difference,
        operations=[_to_read(op) for op in result.operations],
    )
