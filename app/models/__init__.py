"""ORM models package."""
from .base import Base
from .payment import PaymentRecord, PaymentStatus
from .webhook_event import WebhookEvent

__all__ = [
    "Base",
    "PaymentRecord",
    "PaymentStatus",
    "WebhookEvent",
]
