"""HTTP client for the payee's Open Payments wallet endpoint."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

ASSET_SCALE = 2
INCOMING_PAYMENTS_PATH = "/incoming-payments"


@dataclass
class RemoteResponse:
    """What the wallet answered: status, headers and the body as JSON or raw text.

    Non-2xx answers are ordinary values; the caller decides what they mean.
    """

    status: int
    headers: dict[str, list[str]] = field(default_factory=dict)
    json: Any = None
    text: str | None = None

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "RemoteResponse":
        headers: dict[str, list[str]] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(name.lower(), []).append(value)

        try:
            return cls(status=response.status_code, headers=headers, json=response.json())
        except ValueError:
            return cls(status=response.status_code, headers=headers, text=response.text)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def json_object(self) -> dict[str, Any] | None:
        """The body when it is a JSON object, ``None`` otherwise."""

        return self.json if isinstance(self.json, dict) else None

    def header(self, name: str) -> str | None:
        values = self.headers.get(name.lower()) or []
        return values[0] if values else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status, "headers": self.headers}
        if self.text is not None:
            payload["text"] = self.text
        else:
            payload["json"] = self.json
        return payload


def incoming_payments_url(endpoint_base_url: str) -> str:
    """``{base}/incoming-payments`` with trailing slashes of ``base`` removed."""

    return f"{endpoint_base_url.rstrip('/')}{INCOMING_PAYMENTS_PATH}"


class OpenPaymentsClient:
    """Bearer-authenticated calls to create and fetch incoming payments."""

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "OpenPaymentsClient":
        """Instantiate a client using the cached application settings."""

        settings = settings or get_settings()
        return cls(
            api_key=settings.OPEN_PAYMENTS_API_KEY,
            timeout_seconds=settings.OPEN_PAYMENTS_TIMEOUT_SECONDS,
        )

    def __enter__(self) -> "OpenPaymentsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def _call(self, method: str, url: str, body: dict[str, Any] | None = None) -> RemoteResponse:
        response = self._client.request(method, url, json=body, headers=self._headers())
        remote = RemoteResponse.from_httpx(response)
        log = logger.info if remote.ok else logger.warning
        log(
            "Open Payments call completed",
            extra={"method": method, "url": url, "remote_status": remote.status},
        )
        return remote

    def create_incoming_payment(
        self,
        endpoint_base_url: str,
        amount_minor_units: str,
        currency: str,
        local_id: str,
        memo: str,
        expires_at: str | None = None,
    ) -> RemoteResponse:
        """Create an incoming payment on the payee's wallet.

        ``amount_minor_units`` is the integer amount at ``ASSET_SCALE`` rendered
        as a string; ``local_id`` travels in the metadata so that later polls and
        webhooks can be matched back to the local record.
        """

        payload: dict[str, Any] = {
            "walletAddress": endpoint_base_url,
            "incomingAmount": {
                "value": amount_minor_units,
                "assetCode": currency,
                "assetScale": ASSET_SCALE,
            },
            "metadata": {"localId": local_id, "memo": memo},
        }
        if expires_at:
            payload["expiresAt"] = expires_at
        return self._call("POST", incoming_payments_url(endpoint_base_url), payload)

    def fetch_resource(self, url: str) -> RemoteResponse:
        return self._call("GET", url)


def get_gateway() -> Iterator[OpenPaymentsClient]:
    """Provide a gateway client for FastAPI dependencies."""

    client = OpenPaymentsClient.from_settings()
    try:
        yield client
    finally:
        client.close()


__all__ = [
    "ASSET_SCALE",
    "RemoteResponse",
    "OpenPaymentsClient",
    "incoming_payments_url",
    "get_gateway",
]
