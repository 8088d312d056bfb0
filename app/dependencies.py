"""FastAPI dependency providers wiring the payment components together."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db import get_db
from app.services.open_payments import OpenPaymentsClient, get_gateway
from app.services.payment_intents import PaymentIntentHandler
from app.services.reconciler import StatusReconciler
from app.services.record_store import PaymentRecordStore


def get_record_store(db: Session = Depends(get_db)) -> PaymentRecordStore:
    return PaymentRecordStore(db)


def get_payment_intent_handler(
    store: PaymentRecordStore = Depends(get_record_store),
    gateway: OpenPaymentsClient = Depends(get_gateway),
) -> PaymentIntentHandler:
    return PaymentIntentHandler(store, gateway, default_currency=get_settings().DEFAULT_CURRENCY)


def get_status_reconciler(
    store: PaymentRecordStore = Depends(get_record_store),
    gateway: OpenPaymentsClient = Depends(get_gateway),
) -> StatusReconciler:
    return StatusReconciler(store, gateway, base_url=get_settings().OPEN_PAYMENTS_BASE)


def get_webhook_reconciler(store: PaymentRecordStore = Depends(get_record_store)) -> StatusReconciler:
    """Pushed updates only touch the store; no gateway client is opened."""

    return StatusReconciler(store, gateway=None, base_url=get_settings().OPEN_PAYMENTS_BASE)


__all__ = [
    "get_record_store",
    "get_payment_intent_handler",
    "get_status_reconciler",
    "get_webhook_reconciler",
]
