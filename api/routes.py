"""Admin routes for inspecting and clearing the in-memory cache."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging

from models import CacheClearResponse, CacheStatsModel, CacheStatsResponse
from services.cache import TTLCache, get_cache

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/admin/cache")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_response(error: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "error": str(error)})


@router.post("/clear", response_model=CacheClearResponse)
def clear_cache(cache: TTLCache = Depends(get_cache)):
    """Clear every cache entry, e.g. after categories or videos were edited."""
    try:
        stats_before = cache.stats()
        result = cache.clear()
        stats_after = cache.stats()
        logger.info(f"Cache cleared, {result.cleared_count} entries removed")
        return CacheClearResponse(
            success=True,
            message="Cache cleared successfully",
            statsBefore=CacheStatsModel(**stats_before.to_dict()),
            statsAfter=CacheStatsModel(**stats_after.to_dict()),
            clearedCount=result.cleared_count,
            timestamp=_timestamp(),
        )
    except Exception as e:
        logger.error(f"Error clearing cache: {e}")
        return _error_response(e)


@router.get("/clear", response_model=CacheStatsResponse)
def get_cache_stats(cache: TTLCache = Depends(get_cache)):
    """Report how many entries are active and how many are stale."""
    try:
        stats = cache.stats()
        return CacheStatsResponse(
            success=True,
            stats=CacheStatsModel(**stats.to_dict()),
            timestamp=_timestamp(),
        )
    except Exception as e:
        logger.error(f"Error getting cache stats: {e}")
        return _error_response(e)
