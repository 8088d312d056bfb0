"""Schema package exports."""
from .payment import PaymentCreate, PaymentCreated, PaymentList, PaymentRecordRead, StatusRead
from .webhook import WebhookEventRead

__all__ = [
    "PaymentCreate",
    "PaymentCreated",
    "PaymentList",
    "PaymentRecordRead",
    "StatusRead",
    "WebhookEventRead",
]
