from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from orderdesk.app.api.deps import get_order_numbers, require_admin
from orderdesk.app.schemas.order_number import (
    CounterRead,
    OrderNumberCreate,
    OrderNumberErrorResponse,
    OrderNumberRead,
)
from orderdesk.services.order_numbers import OrderNumberError, OrderNumberGenerator

router = APIRouter(prefix="/order-numbers")


@router.post(
    "",
    response_model=OrderNumberRead,
    status_code=201,
    responses={400: {"model": OrderNumberErrorResponse}},
)
def create_order_number(
    payload: OrderNumberCreate,
    generator: OrderNumberGenerator = Depends(get_order_numbers),
):
    try:
        issued = generator.issue(payload.channel, payload.actor_id, payload.reference_date)
    except OrderNumberError as e:
        raise HTTPException(status_code=400, detail={"code": e.code.value, "message": e.message})
    return issued


@router.get("/counters/{key}", response_model=CounterRead)
def get_counter(key: str, generator: OrderNumberGenerator = Depends(get_order_numbers)):
    return {"key": key, "value": generator.get_counter(key)}


@router.post("/reset", dependencies=[Depends(require_admin)])
def reset_counters(generator: OrderNumberGenerator = Depends(get_order_numbers)):
    generator.reset()
    return {"ok": True}
