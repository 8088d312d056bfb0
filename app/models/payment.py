"""Payment record model definitions."""
import enum
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class PaymentStatus(str, enum.Enum):
    """Statuses assigned locally; any other value is a status reported by the wallet."""

    PENDING = "pending"
    CREATED = "created"
    RECEIVED = "received"
    WEBHOOK_UPDATED = "webhook_updated"


class PaymentRecord(TimestampMixin, Base):
    """One incoming-payment attempt and the last remote state seen for it."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_positive_amount"),
        Index("ix_payments_created_at", "created_at"),
        Index("ix_payments_status", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    local_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="MXN")
    payee: Mapped[str] = mapped_column(String(2048), nullable=False)
    status: Mapped[str] = mapped_column(String(64), nullable=False, default=PaymentStatus.PENDING.value)
    resource_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    remote_response: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<PaymentRecord(id={self.id}, local_id={self.local_id}, status={self.status})>"
