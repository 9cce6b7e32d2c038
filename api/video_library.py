"""Video library routes. Listings are cached per user."""

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from typing import Any, Callable, Optional, Tuple
import logging

from models import (
    CacheWarmResponse, CategoriesResponse, ReorderRequest, ReorderResponse,
    SubcategoryCountResponse, UserProfile, VideoListResponse,
)
from services.cache import TTLCache, get_cache
from services.cache_keys import (
    CacheKeys, CacheTTL, categories_summary_key, namespace_prefix,
    subcategory_count_key, subcategory_videos_key, user_permissions_key,
)
from services.video_library import (
    can_see_unapproved, count_subcategory_videos, fetch_categories_summary,
    fetch_subcategory_videos, fetch_user_profile, find_subcategory,
    list_subcategories_with_videos, reorder_categories, reorder_subcategories,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/video-library")

WARM_PAGE_SIZE = 100


def _cached(cache: TTLCache, key: str, compute: Callable[[], Any], ttl_ms: int,
            nocache: bool = False, guard_prefix: Optional[str] = None) -> Tuple[Any, bool]:
    """Serve key from cache, recomputing on a miss or when nocache is set.

    Returns (value, hit).
    """
    def recompute():
        logger.info(f"Cache miss for {key}, recomputing")
        return compute()

    return cache.get_or_set(key, recompute, ttl_ms, guard_prefix=guard_prefix, refresh=nocache)


def _user_profile(cache: TTLCache, user_id: str, nocache: bool = False) -> UserProfile:
    profile, _ = _cached(
        cache,
        user_permissions_key(user_id),
        lambda: fetch_user_profile(user_id),
        CacheTTL.USER_PERMISSIONS,
        nocache=nocache,
    )
    return profile


def _require_subcategory(subcategory_id: str):
    if find_subcategory(subcategory_id) is None:
        raise HTTPException(status_code=404, detail=f"Subcategory {subcategory_id} not found")


@router.get("/categories", response_model=CategoriesResponse)
def get_categories(
    nocache: int = 0,
    x_user_id: str = Header("anonymous"),
    cache: TTLCache = Depends(get_cache),
):
    """Category tree with video counts visible to the calling user."""
    profile = _user_profile(cache, x_user_id, nocache=bool(nocache))
    include_unapproved = can_see_unapproved(profile)
    categories, hit = _cached(
        cache,
        categories_summary_key(x_user_id),
        lambda: fetch_categories_summary(include_unapproved),
        CacheTTL.CATEGORIES,
        nocache=bool(nocache),
        # a reorder while computing would otherwise cache the old order
        guard_prefix=namespace_prefix(CacheKeys.CATEGORIES_SUMMARY),
    )
    return CategoriesResponse(success=True, data=categories, cached=hit)


@router.get("/subcategory-videos", response_model=VideoListResponse)
def get_subcategory_videos(
    subcategory_id: str = Query(..., alias="subcategoryId"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    nocache: int = 0,
    x_user_id: str = Header("anonymous"),
    cache: TTLCache = Depends(get_cache),
):
    """One page of a subcategory's videos, newest first."""
    _require_subcategory(subcategory_id)
    profile = _user_profile(cache, x_user_id, nocache=bool(nocache))
    include_unapproved = can_see_unapproved(profile)
    videos, hit = _cached(
        cache,
        subcategory_videos_key(subcategory_id, x_user_id, limit, offset),
        lambda: fetch_subcategory_videos(subcategory_id, include_unapproved, limit, offset),
        CacheTTL.SUBCATEGORY_VIDEOS,
        nocache=bool(nocache),
    )
    return VideoListResponse(success=True, data=videos, cached=hit, total=len(videos))


@router.get("/subcategory-count", response_model=SubcategoryCountResponse)
def get_subcategory_count(
    subcategory_id: str = Query(..., alias="subcategoryId"),
    nocache: int = 0,
    x_user_id: str = Header("anonymous"),
    cache: TTLCache = Depends(get_cache),
):
    _require_subcategory(subcategory_id)
    profile = _user_profile(cache, x_user_id, nocache=bool(nocache))
    include_unapproved = can_see_unapproved(profile)
    count, hit = _cached(
        cache,
        subcategory_count_key(subcategory_id, x_user_id),
        lambda: count_subcategory_videos(subcategory_id, include_unapproved),
        CacheTTL.SUBCATEGORY_COUNT,
        nocache=bool(nocache),
    )
    return SubcategoryCountResponse(success=True, subcategoryId=subcategory_id, count=count, cached=hit)


@router.post("/categories/reorder", response_model=ReorderResponse)
def post_reorder(
    request: ReorderRequest,
    cache: TTLCache = Depends(get_cache),
):
    """Reorder categories, or one category's subcategories.

    Either way every user's cached category summary is dropped.
    """
    ids = [item.id for item in request.items]
    try:
        if request.type == "categories":
            ordered = reorder_categories(ids)
        elif request.type == "subcategories":
            if not request.categoryId:
                raise HTTPException(status_code=400,
                                    detail="Category ID is required for subcategory reordering")
            ordered = reorder_subcategories(request.categoryId, ids)
        else:
            raise HTTPException(status_code=400,
                                detail='Invalid type. Must be "categories" or "subcategories"')
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    invalidated = cache.invalidate_prefix(namespace_prefix(CacheKeys.CATEGORIES_SUMMARY))
    logger.info(f"Invalidated {invalidated} cached category summaries")
    return ReorderResponse(
        success=True,
        message=f"{request.type} reordered successfully",
        order=ordered,
        invalidated=invalidated,
    )


@router.post("/cache-warm", response_model=CacheWarmResponse)
def warm_cache(
    x_user_id: str = Header("anonymous"),
    cache: TTLCache = Depends(get_cache),
):
    """Precompute the first page and count of every populated subcategory."""
    profile = _user_profile(cache, x_user_id)
    include_unapproved = can_see_unapproved(profile)
    subcategories = list_subcategories_with_videos()

    if not subcategories:
        return CacheWarmResponse(success=True, message="No subcategories to warm", warmed=0, total=0)

    warmed = 0
    for subcategory in subcategories:
        subcategory_id = subcategory["id"]
        try:
            videos = fetch_subcategory_videos(subcategory_id, include_unapproved, WARM_PAGE_SIZE, 0)
            if not videos:
                continue
            cache.set(
                subcategory_videos_key(subcategory_id, x_user_id, WARM_PAGE_SIZE, 0),
                videos,
                CacheTTL.SUBCATEGORY_VIDEOS,
            )
            cache.set(
                subcategory_count_key(subcategory_id, x_user_id),
                count_subcategory_videos(subcategory_id, include_unapproved),
                CacheTTL.SUBCATEGORY_COUNT,
            )
            warmed += 1
        except Exception as e:
            logger.error(f"Error warming cache for subcategory {subcategory_id}: {e}")

    return CacheWarmResponse(
        success=True,
        message=f"Cache warmed for {warmed} subcategories",
        warmed=warmed,
        total=len(subcategories),
    )
