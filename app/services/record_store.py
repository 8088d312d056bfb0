"""Persistence of payment records."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.payment import PaymentRecord
from app.utils.errors import ConflictError

logger = logging.getLogger(__name__)


class PaymentRecordStore:
    """Point inserts, point updates and a recency listing over ``payments``."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, record_id: str) -> PaymentRecord | None:
        return self.db.get(PaymentRecord, record_id)

    def get_by_local_id(self, local_id: str) -> PaymentRecord | None:
        stmt = select(PaymentRecord).where(PaymentRecord.local_id == local_id)
        return self.db.scalars(stmt).one_or_none()

    def insert(self, record: PaymentRecord) -> PaymentRecord:
        """Store a new record, raising ``ConflictError`` on a duplicate id or local id."""

        if self.get(record.id) is not None:
            raise ConflictError(f"payment record {record.id} already exists")
        if self.get_by_local_id(record.local_id) is not None:
            raise ConflictError(f"local id {record.local_id} already in use")

        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f"payment record {record.id} already exists") from exc
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(record)
        logger.info(
            "Payment record stored",
            extra={"record_id": record.id, "local_id": record.local_id, "status": record.status},
        )
        return record

    def update_by_local_id(
        self,
        local_id: str,
        status: str,
        remote_response: dict[str, Any] | None,
        resource_url: str | None = None,
    ) -> PaymentRecord | None:
        """Refresh status and response blob of the matching record.

        Returns ``None`` without touching the table when nothing matches.
        A ``resource_url`` of ``None`` keeps the stored value.
        """

        record = self.get_by_local_id(local_id)
        if record is None:
            logger.info("No payment record for local id", extra={"local_id": local_id})
            return None

        record.status = status
        record.remote_response = remote_response
        if resource_url is not None:
            record.resource_url = resource_url
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(record)
        logger.info(
            "Payment record updated",
            extra={"record_id": record.id, "local_id": local_id, "status": status},
        )
        return record

    def list_recent(self, limit: int) -> list[PaymentRecord]:
        """Return up to ``limit`` records, newest first."""

        stmt = (
            select(PaymentRecord)
            .order_by(PaymentRecord.created_at.desc(), PaymentRecord.id.desc())
            .limit(max(limit, 0))
        )
        return list(self.db.scalars(stmt).all())

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(PaymentRecord)) or 0


__all__ = ["PaymentRecordStore"]
