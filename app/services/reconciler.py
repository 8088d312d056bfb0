"""Merging remote incoming-payment status into local payment records.

Two paths feed the same merge: the poll path fetches the remote resource on
request, the webhook path receives it pushed by the wallet. Both match by the
``localId`` carried in the resource metadata; when no record matches, the
update is dropped and logged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.models.payment import PaymentStatus
from app.services.open_payments import OpenPaymentsClient, RemoteResponse
from app.services.record_store import PaymentRecordStore
from app.utils.payloads import first_present, is_present

logger = logging.getLogger(__name__)

POLL_LOCAL_ID_PATHS = (("metadata", "localId"),)

WEBHOOK_LOCAL_ID_PATHS = (
    ("data", "metadata", "localId"),
    ("metadata", "localId"),
    ("metadata", "local_id"),
)
WEBHOOK_STATUS_PATHS = (("data", "status"), ("status",))
WEBHOOK_RESOURCE_URL_PATHS = (("data", "id"), ("id",))


@dataclass
class WebhookOutcome:
    local_id: str | None
    status: str
    resource_url: str | None
    matched: bool = False


def _as_text(value: Any) -> str | None:
    return str(value) if is_present(value) else None


def extract_poll_status(body: dict[str, Any] | None) -> str | None:
    """Remote ``status``, else ``received`` once a ``receiveAmount`` shows up."""

    if body is None:
        return None
    status = body.get("status")
    if is_present(status):
        return str(status)
    if body.get("receiveAmount") is not None:
        return PaymentStatus.RECEIVED.value
    return None


def extract_webhook_fields(payload: Any) -> WebhookOutcome:
    return WebhookOutcome(
        local_id=_as_text(first_present(payload, WEBHOOK_LOCAL_ID_PATHS)),
        status=str(
            first_present(payload, WEBHOOK_STATUS_PATHS, default=PaymentStatus.WEBHOOK_UPDATED.value)
        ),
        resource_url=_as_text(first_present(payload, WEBHOOK_RESOURCE_URL_PATHS)),
    )


class StatusReconciler:
    """Apply polled or pushed remote status to the record store."""

    def __init__(
        self,
        store: PaymentRecordStore,
        gateway: OpenPaymentsClient | None,
        base_url: str | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.base_url = base_url

    def resolve_reference(self, reference: str) -> str:
        """Absolute URLs pass through; anything else is joined onto ``base_url``."""

        if reference.startswith(("http://", "https://")):
            return reference
        base = (self.base_url or "").rstrip("/")
        return f"{base}/{reference.lstrip('/')}"

    def poll_status(self, reference: str) -> RemoteResponse:
        """Fetch the remote resource and merge its status; always return the response."""

        if self.gateway is None:
            raise RuntimeError("polling needs a gateway client")
        url = self.resolve_reference(reference)
        remote = self.gateway.fetch_resource(url)

        try:
            body = remote.json_object
            local_id = _as_text(first_present(body, POLL_LOCAL_ID_PATHS))
            status = extract_poll_status(body)
            if local_id and status:
                self.store.update_by_local_id(local_id, status, remote.to_dict())
            else:
                logger.info(
                    "Polled resource carries no local id or status",
                    extra={"url": url, "remote_status": remote.status},
                )
        except Exception:  # noqa: BLE001
            logger.warning("Status merge after poll failed", extra={"url": url}, exc_info=True)

        return remote

    def apply_webhook(self, payload: Any) -> WebhookOutcome:
        """Merge a pushed notification; payloads without a local id change nothing."""

        outcome = extract_webhook_fields(payload if isinstance(payload, dict) else {})
        if not outcome.local_id:
            logger.info("Webhook without local id ignored", extra={"status": outcome.status})
            return outcome

        record = self.store.update_by_local_id(
            outcome.local_id,
            outcome.status,
            payload,
            resource_url=outcome.resource_url,
        )
        outcome.matched = record is not None
        return outcome


__all__ = [
    "StatusReconciler",
    "WebhookOutcome",
    "extract_poll_status",
    "extract_webhook_fields",
]
