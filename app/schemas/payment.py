"""Schemas for payment records."""
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PaymentCreate(BaseModel):
    """Body of ``POST /create-payment``.

    Fields are deliberately loose; presence and amount checks happen in the
    payment intent handler so that clients get its error messages.
    """

    amount: str | int | float | None = None
    currency: str | None = None
    payee: str | None = None
    memo: str | None = None
    expires_in_seconds: str | int | float | None = Field(
        default=None,
        validation_alias=AliasChoices("expiresInSeconds", "expires_in_seconds"),
    )


class PaymentCreated(BaseModel):
    success: bool = True
    localId: str
    localDbId: str
    resource_url: str | None
    op: dict[str, Any]


class PaymentRecordRead(BaseModel):
    id: str
    local_id: str
    amount: Decimal
    currency: str
    payee: str
    status: str
    resource_url: str | None
    remote_response: dict[str, Any] | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentList(BaseModel):
    count: int
    rows: list[PaymentRecordRead]


class StatusRead(BaseModel):
    success: bool = True
    op: dict[str, Any]
