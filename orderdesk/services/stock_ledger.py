"""
Stock ledger reconciliation.

Keeps an append-only log of stock operations and replays it to get the
stock a product *should* have, then compares that with the stock the system
of record reports.

Sign table (fixed):
    create, edit     -> stock - quantity   (order draw-down / reducing correction)
    delete, restore  -> stock + quantity   (cancelled order / restored state)
    anything else    -> no effect

This is a diagnostic: nothing here raises on data. A mismatch is only ever
reported as ``ReconciliationResult.is_valid == False``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderdesk.app.db.models.core_types import StockOperationKind

logger = logging.getLogger(__name__)

# Floating point accumulation only, not a business tolerance.
STOCK_TOLERANCE = 0.01

SIGNS: dict[str, int] = {
    StockOperationKind.create.value: -1,
    StockOperationKind.edit.value: -1,
    StockOperationKind.delete.value: 1,
    StockOperationKind.restore.value: 1,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StockOperation:
    product_id: str
    operation: str
    quantity: float
    timestamp: datetime = field(default_factory=_utcnow)
    order_id: str | None = None

    @property
    def kind(self) -> str:
        if isinstance(self.operation, StockOperationKind):
            return self.operation.value
        return self.operation

    @property
    def signed_quantity(self) -> float:
        return SIGNS.get(self.kind, 0) * self.quantity


@dataclass(frozen=True)
class ReconciliationResult:
    product_id: str
    is_valid: bool
    expected_stock: float
    reported_stock: float
    difference: float
    operations: tuple[StockOperation, ...]


class StockLedgerReconciler:
    def __init__(self) -> None:
        self._operations: list[StockOperation] = []
        self._lock = threading.Lock()

    def record_operation(self, op: StockOperation) -> None:
        with self._lock:
            self._operations.append(op)
        logger.info(
            "Stock operation: %s - product %s - qty %+g%s",
            op.kind,
            op.product_id,
            op.quantity,
            f" - order {op.order_id}" if op.order_id else "",
        )

    def operations_for(self, product_id: str) -> list[StockOperation]:
        with self._lock:
            return [op for op in self._operations if op.product_id == product_id]

    def all_operations(self) -> list[StockOperation]:
        with self._lock:
            return list(self._operations)

    def expected_stock(self, product_id: str, initial_stock: float = 0) -> float:
        return self._fold(self.operations_for(product_id), initial_stock)

    @staticmethod
    def _fold(operations: list[StockOperation], initial_stock: float) -> float:
        stock = initial_stock
        for op in operations:
            stock += op.signed_quantity
        return stock

    def validate(
        self,
        product_id: str,
        reported_stock: float,
        initial_stock: float = 0,
    ) -> ReconciliationResult:
        # one snapshot for both the fold and the returned operations
        operations = self.operations_for(product_id)
        expected = self._fold(operations, initial_stock)
        difference = reported_stock - expected
        is_valid = abs(difference) < STOCK_TOLERANCE

        if not is_valid:
            logger.warning(
                "Stock drift for product %s: reported=%s expected=%s difference=%s",
                product_id,
                reported_stock,
                expected,
                difference,
            )

        return ReconciliationResult(
            product_id=product_id,
            is_valid=is_valid,
            expected_stock=expected,
            reported_stock=reported_stock,
            difference=difference,
            operations=tuple(operations),
        )

    def clear_history(self) -> None:
        with self._lock:
            dropped = len(self._operations)
            self._operations = []
        logger.warning("Cleared stock ledger history (%d operations)", dropped)

    def dispose(self) -> None:
        self.clear_history()

    def __len__(self) -> int:
        with self._lock:
            return len(self._operations)
