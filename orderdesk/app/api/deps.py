from __future__ import annotations

import secrets

from fastapi import Depends, Header, HTTPException, Request

from orderdesk.app.core.config import Settings
from orderdesk.services.order_numbers import OrderNumberGenerator
from orderdesk.services.stock_ledger import StockLedgerReconciler


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_order_numbers(request: Request) -> OrderNumberGenerator:
    return request.app.state.order_numbers


def get_stock_ledger(request: Request) -> StockLedgerReconciler:
    return request.app.state.stock_ledger


def require_admin(
    admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
    settings: Settings = Depends(get_app_settings),
) -> None:
    if not settings.admin_token:
        raise HTTPException(status_code=503, detail="Admin actions are disabled (ADMIN_TOKEN not set)")
    if not admin_token or not secrets.compare_digest(admin_token, settings.admin_token):
        raise HTTPException(status_code=403, detail="Invalid admin token")
