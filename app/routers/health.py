"""Liveness and configuration probe."""
from __future__ import annotations

import hashlib
import logging

from fastapi import APIRouter
from sqlalchemy import text

from app.config import AppInfo, get_settings
from app.db import get_engine

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


def _database_reachable() -> bool:
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:  # noqa: BLE001
        logger.exception("Database probe failed")
        return False
    return True


def key_fingerprint(api_key: str | None) -> str | None:
    """First 8 hex chars of the key's SHA-256, enough to tell keys apart without leaking them."""

    if not api_key:
        return None
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:8]


@router.get("/health", summary="Health check")
def healthcheck() -> dict[str, object]:
    settings = get_settings()
    info = AppInfo()
    db_ok = _database_reachable()
    return {
        "status": "ok" if db_ok else "degraded",
        "service": info.name,
        "version": info.version,
        "env": settings.app_env,
        "db_ok": db_ok,
        "db_status": "ok" if db_ok else "error",
        "open_payments_base_configured": bool(settings.OPEN_PAYMENTS_BASE),
        "open_payments_api_key_fingerprint": key_fingerprint(settings.OPEN_PAYMENTS_API_KEY),
    }


__all__ = ["router", "key_fingerprint"]
