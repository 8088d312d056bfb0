"""Payment creation and listing endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.config import get_settings
from app.dependencies import get_payment_intent_handler, get_record_store
from app.models.payment import PaymentRecord
from app.schemas.payment import PaymentCreate, PaymentCreated, PaymentList, PaymentRecordRead
from app.services.payment_intents import PaymentIntentHandler
from app.services.record_store import PaymentRecordStore
from app.utils.errors import ValidationError, error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/create-payment", response_model=PaymentCreated, status_code=status.HTTP_200_OK)
def create_payment(
    payload: PaymentCreate,
    handler: PaymentIntentHandler = Depends(get_payment_intent_handler),
) -> PaymentCreated:
    """Create an incoming payment on the payee's wallet and record the attempt."""

    try:
        result = handler.create_payment(
            payload.amount,
            payload.payee,
            currency=payload.currency,
            memo=payload.memo,
            expires_in_seconds=payload.expires_in_seconds,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_response(str(exc)))
    except Exception as exc:  # noqa: BLE001
        logger.exception("create-payment failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_response(str(exc))
        )

    return PaymentCreated(
        localId=result.local_id,
        localDbId=result.record_id,
        resource_url=result.resource_url,
        op=result.remote_response.to_dict(),
    )


@router.get("/payments", response_model=PaymentList)
def list_payments(store: PaymentRecordStore = Depends(get_record_store)) -> PaymentList:
    """Most recent payment records, newest first."""

    rows = store.list_recent(get_settings().PAYMENTS_LIST_LIMIT)
    return PaymentList(count=len(rows), rows=[PaymentRecordRead.model_validate(row) for row in rows])


@router.get("/payments/{record_id}", response_model=PaymentRecordRead)
def get_payment(record_id: str, store: PaymentRecordStore = Depends(get_record_store)) -> PaymentRecord:
    record = store.get(record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_response("payment not found"),
        )
    return record


__all__ = ["router"]
