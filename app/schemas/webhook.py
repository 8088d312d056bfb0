"""Schemas for webhook deliveries."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class WebhookEventRead(BaseModel):
    id: int
    local_id: str | None
    status: str
    resource_url: str | None
    matched: bool
    raw_json: dict[str, Any]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
