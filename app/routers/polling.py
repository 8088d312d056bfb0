"""Polling endpoint for remote incoming-payment status."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_status_reconciler
from app.schemas.payment import StatusRead
from app.services.reconciler import StatusReconciler
from app.utils.errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get("/status/{reference:path}", response_model=StatusRead)
def poll_status(
    reference: str,
    reconciler: StatusReconciler = Depends(get_status_reconciler),
) -> StatusRead:
    """Fetch a remote resource by absolute URL or path relative to the configured base."""

    if not reference:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_response("resource path required"),
        )

    try:
        remote = reconciler.poll_status(reference)
    except Exception as exc:  # noqa: BLE001
        logger.exception("status poll failed", extra={"reference": reference})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_response(str(exc))
        )
    return StatusRead(op=remote.to_dict())


__all__ = ["router"]
