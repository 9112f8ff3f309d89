import os

from fastapi import APIRouter, HTTPException
from structlog import get_logger

from app.config import settings
from app.services.cache import clear_prefix, get_redis
from app.services.overpass import CACHE_PREFIX

logger = get_logger()
router = APIRouter(prefix="/api/v1", tags=["health"]) 

@router.get("/health")
async def health():
    return {"status": "ok"}

@router.get("/health/ready")
async def readiness():
    details = {"status": "ok", "checks": {}}

    # Redis check
    try:
        pong = await get_redis().ping()
        details["checks"]["redis"] = "ok" if pong else "fail"
    except Exception as e:
        logger.warning("health redis fail", error=str(e))
        details["checks"]["redis"] = f"fail: {str(e)}"
        details["status"] = "degraded"

    # Static dataset check
    if os.path.isfile(settings.BIERGARTEN_DATA_PATH):
        details["checks"]["static_data"] = "ok"
    else:
        logger.warning("health static data missing", path=settings.BIERGARTEN_DATA_PATH)
        details["checks"]["static_data"] = "fail: missing"
        details["status"] = "degraded"

    return details

@router.post("/cache/clear")
async def clear_cache():
    """
    Drop cached Overpass responses so the next live lookup hits the API again.
    """
    try:
        deleted = await clear_prefix(CACHE_PREFIX)
        logger.info("Cache cleared", deleted_keys=deleted)
        return {"status": "ok", "cleared_keys": deleted}
    except Exception as e:
        logger.error("Failed to clear cache", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to clear cache: {str(e)}")
