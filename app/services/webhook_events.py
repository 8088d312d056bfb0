"""Audit trail of inbound webhook deliveries."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.webhook_event import WebhookEvent
from app.services.reconciler import WebhookOutcome

logger = logging.getLogger(__name__)


def record_webhook_event(db: Session, outcome: WebhookOutcome, payload: Any) -> WebhookEvent:
    """Persist one delivery together with what was extracted from it."""

    event = WebhookEvent(
        local_id=outcome.local_id,
        status=outcome.status,
        resource_url=outcome.resource_url,
        matched=outcome.matched,
        raw_json=payload if isinstance(payload, dict) else {},
    )
    try:
        db.add(event)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(event)
    logger.info(
        "Webhook event recorded",
        extra={"event_id": event.id, "local_id": outcome.local_id, "matched": outcome.matched},
    )
    return event


def list_webhook_events(db: Session, local_id: str | None = None, limit: int = 100) -> list[WebhookEvent]:
    stmt = (
        select(WebhookEvent)
        .order_by(WebhookEvent.created_at.desc(), WebhookEvent.id.desc())
        .limit(limit)
    )
    if local_id:
        stmt = stmt.where(WebhookEvent.local_id == local_id)
    return list(db.scalars(stmt).all())


__all__ = ["record_webhook_event", "list_webhook_events"]
