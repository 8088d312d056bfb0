"""Creation of incoming payments on behalf of a payee."""
from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable

from app.models.payment import PaymentRecord, PaymentStatus
from app.services.open_payments import ASSET_SCALE, OpenPaymentsClient, RemoteResponse
from app.services.record_store import PaymentRecordStore
from app.utils.errors import ValidationError
from app.utils.payloads import is_present
from app.utils.time import isoformat_z, utcnow

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "MXN"
CREATED_HTTP_STATUSES = {200, 201}


@dataclass
class PaymentIntentResult:
    local_id: str
    record_id: str
    resource_url: str | None
    remote_response: RemoteResponse


def parse_amount(value: Any) -> Decimal:
    """Parse a positive, finite amount in major units or raise ``ValidationError``."""

    if isinstance(value, bool):
        raise ValidationError("invalid amount")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError("invalid amount") from exc
    if not amount.is_finite():
        raise ValidationError("invalid amount")
    # Must stay inside double range without underflowing to zero.
    as_float = float(amount)
    if not math.isfinite(as_float) or as_float <= 0:
        raise ValidationError("invalid amount")
    return amount


def is_missing_amount(value: Any) -> bool:
    """``None``, an empty string and numeric zero all count as no amount given.

    The string ``"0"`` is an amount, just not a valid one.
    """

    if not is_present(value):
        return True
    return isinstance(value, (int, float)) and value == 0


def to_minor_units(amount: Decimal, scale: int = ASSET_SCALE) -> str:
    """Scale ``amount`` to minor units, rounding half up, as an integer string."""

    scaled = (amount * (Decimal(10) ** scale)).to_integral_value(rounding=ROUND_HALF_UP)
    return str(int(scaled))


def parse_expiry_seconds(value: Any) -> Decimal | None:
    """Return the expiry window when ``value`` is a positive number, else ``None``."""

    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not seconds.is_finite() or seconds <= 0:
        return None
    return seconds


def classify_status(remote: RemoteResponse) -> str:
    if remote.status in CREATED_HTTP_STATUSES:
        return PaymentStatus.CREATED.value
    return PaymentStatus.PENDING.value


def extract_resource_url(remote: RemoteResponse) -> str | None:
    """Prefer the body's ``id``; fall back to the ``Location`` header."""

    body = remote.json_object or {}
    resource_id = body.get("id")
    if is_present(resource_id):
        return str(resource_id)
    return remote.header("location")


class PaymentIntentHandler:
    """Validate a payment request, create it remotely and record the attempt."""

    def __init__(
        self,
        store: PaymentRecordStore,
        gateway: OpenPaymentsClient,
        clock: Callable[[], datetime] = utcnow,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.clock = clock
        self.default_currency = default_currency

    def create_payment(
        self,
        amount: Any,
        payee: str | None,
        currency: str | None = None,
        memo: str | None = None,
        expires_in_seconds: Any = None,
    ) -> PaymentIntentResult:
        if is_missing_amount(amount) or not is_present(payee) or not str(payee).strip():
            raise ValidationError("amount and payee required")
        parsed_amount = parse_amount(amount)

        currency = currency or self.default_currency
        payee = str(payee)
        local_id = str(uuid.uuid4())
        memo = memo or f"Pago por servicio ({amount} {currency})"

        expires_at: str | None = None
        seconds = parse_expiry_seconds(expires_in_seconds)
        if seconds is not None:
            expires_at = isoformat_z(self.clock() + timedelta(seconds=float(seconds)))

        remote = self.gateway.create_incoming_payment(
            payee,
            to_minor_units(parsed_amount),
            currency,
            local_id,
            memo,
            expires_at=expires_at,
        )

        status = classify_status(remote)
        resource_url = extract_resource_url(remote)
        record = PaymentRecord(
            id=str(uuid.uuid4()),
            local_id=local_id,
            amount=parsed_amount,
            currency=currency,
            payee=payee,
            status=status,
            resource_url=resource_url,
            remote_response=remote.to_dict(),
        )
        self.store.insert(record)
        logger.info(
            "Incoming payment requested",
            extra={
                "record_id": record.id,
                "local_id": local_id,
                "status": status,
                "remote_status": remote.status,
            },
        )
        return PaymentIntentResult(
            local_id=local_id,
            record_id=record.id,
            resource_url=resource_url,
            remote_response=remote,
        )


__all__ = [
    "DEFAULT_CURRENCY",
    "PaymentIntentHandler",
    "PaymentIntentResult",
    "classify_status",
    "extract_resource_url",
    "is_missing_amount",
    "parse_amount",
    "parse_expiry_seconds",
    "to_minor_units",
]
