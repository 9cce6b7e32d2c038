"""Cache key namespaces and TTL classes used by the video library routes."""

import config

# Delimiter for composite keys
KEY_SEP = "_"


class CacheKeys:
    CATEGORIES_SUMMARY = "categories-summary"
    USER_PERMISSIONS = "user-permissions"
    SUBCATEGORY_VIDEOS = "subcategory-videos"
    SUBCATEGORY_COUNT = "subcategory-count"


class CacheTTL:
    CATEGORIES = config.CACHE_TTL_CATEGORIES_MS
    USER_PERMISSIONS = config.CACHE_TTL_USER_PERMISSIONS_MS
    SUBCATEGORY_VIDEOS = config.CACHE_TTL_SUBCATEGORY_VIDEOS_MS
    SUBCATEGORY_COUNT = config.CACHE_TTL_SUBCATEGORY_COUNT_MS


def build_key(namespace: str, *parts) -> str:
    return KEY_SEP.join([namespace, *(str(part) for part in parts)])


def namespace_prefix(namespace: str) -> str:
    """Prefix matching every key in namespace and nothing in any other."""
    return namespace + KEY_SEP


def categories_summary_key(user_id: str) -> str:
    return build_key(CacheKeys.CATEGORIES_SUMMARY, user_id)


def user_permissions_key(user_id: str) -> str:
    return build_key(CacheKeys.USER_PERMISSIONS, user_id)


def subcategory_videos_key(subcategory_id: str, user_id: str, limit: int, offset: int) -> str:
    return build_key(CacheKeys.SUBCATEGORY_VIDEOS, subcategory_id, user_id, limit, offset)


def subcategory_count_key(subcategory_id: str, user_id: str) -> str:
    return build_key(CacheKeys.SUBCATEGORY_COUNT, subcategory_id, user_id)
