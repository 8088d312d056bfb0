import hashlib

import pytest

from app.routers.health import key_fingerprint


def test_key_fingerprint():
    assert key_fingerprint(None) is None
    assert key_fingerprint("") is None
    assert key_fingerprint("TEST_KEY") == hashlib.sha256(b"TEST_KEY").hexdigest()[:8]


@pytest.mark.anyio("asyncio")
async def test_root_banner(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "service": "pay-per-use-backend-openpayments"}


@pytest.mark.anyio("asyncio")
async def test_health_reports_gateway_configuration(client):
    response = await client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["db_ok"] is True
    assert payload["version"] == "0.1.0"
    assert payload["open_payments_base_configured"] is True
    assert payload["open_payments_api_key_fingerprint"] == key_fingerprint("test-token")
    assert "test-token" not in response.text


@pytest.mark.anyio("asyncio")
async def test_health_degrades_when_database_is_down(monkeypatch, client):
    class UnreachableEngine:
        def connect(self):
            raise RuntimeError("database unreachable")

    monkeypatch.setattr("app.routers.health.get_engine", lambda: UnreachableEngine())

    payload = (await client.get("/health")).json()
    assert payload["status"] == "degraded"
    assert payload["db_status"] == "error"
    assert payload["db_ok"] is False
