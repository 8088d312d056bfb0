"""API routers for the Open Payments demo backend."""
from fastapi import APIRouter

from . import health, payments, polling, root, webhooks


def get_api_router() -> APIRouter:
    """Return the root API router."""

    api_router = APIRouter()
    api_router.include_router(root.router)
    api_router.include_router(health.router)
    api_router.include_router(payments.router)
    api_router.include_router(polling.router)
    api_router.include_router(webhooks.router)
    return api_router
