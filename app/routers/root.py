"""Service banner."""
from fastapi import APIRouter

from app.config import AppInfo

router = APIRouter(tags=["meta"])


@router.get("/")
def service_info() -> dict[str, object]:
    return {"ok": True, "service": AppInfo().name}
