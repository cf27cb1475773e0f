from fastapi import APIRouter

from app.core.config import APP_VERSION
from app.services.redis_service import redis_service

router = APIRouter(tags=["health"])


@router.get("/health", summary="Readiness probe")
async def health_check() -> dict[str, str]:
    """
    The service answers without Redis (the digest ledger degrades to "not sent"),
    so Redis is reported but never fails the probe.
    """
    redis_ok = await redis_service.ping()
    return {"status": "ok", "version": APP_VERSION, "redis": "ok" if redis_ok else "unavailable"}
