"""Video library queries over the catalog.

These are the expensive computations the routes put behind the cache.
"""

import logging
from typing import Dict, List, Optional

from data.mock_data import CATEGORIES, SUBCATEGORIES, VIDEOS, USER_PROFILES, PRIVILEGED_ROLES
from models import CategorySummary, LibraryStatus, Subcategory, UserProfile, Video

logger = logging.getLogger(__name__)

VISITOR_ROLE = "Visitor"


def fetch_user_profile(user_id: str) -> UserProfile:
    """Look up the profile for user_id, falling back to a visitor profile."""
    profile = USER_PROFILES.get(user_id)
    if profile is None:
        logger.info(f"No profile for user {user_id}, treating as {VISITOR_ROLE}")
        return UserProfile(roleType=VISITOR_ROLE)
    return UserProfile(**profile)


def can_see_unapproved(profile: UserProfile) -> bool:
    return profile.roleType in PRIVILEGED_ROLES


def find_subcategory(subcategory_id: str) -> Optional[Dict]:
    for subcategory in SUBCATEGORIES:
        if subcategory["id"] == subcategory_id:
            return subcategory
    return None


def _visible_videos(subcategory_id: str, include_unapproved: bool) -> List[Dict]:
    videos = [v for v in VIDEOS if v["subcategoryId"] == subcategory_id]
    if not include_unapproved:
        videos = [v for v in videos if v["libraryStatus"] == LibraryStatus.APPROVED.value]
    return sorted(videos, key=lambda v: v["createdAt"], reverse=True)


def fetch_categories_summary(include_unapproved: bool) -> List[CategorySummary]:
    """Build the category tree with per-subcategory video counts."""
    summaries = []
    for position, category in enumerate(CATEGORIES):
        subcategories = [
            Subcategory(
                id=sub["id"],
                name=sub["name"],
                videoCount=len(_visible_videos(sub["id"], include_unapproved)),
            )
            for sub in SUBCATEGORIES
            if sub["categoryId"] == category["id"]
        ]
        summaries.append(CategorySummary(
            id=category["id"],
            name=category["name"],
            description=category.get("description"),
            position=position,
            subcategories=subcategories,
        ))
    return summaries


def fetch_subcategory_videos(subcategory_id: str, include_unapproved: bool,
                             limit: int, offset: int) -> List[Video]:
    """Return one page of a subcategory's videos, newest first."""
    subcategory = find_subcategory(subcategory_id)
    if subcategory is None:
        return []
    category_names = {c["id"]: c["name"] for c in CATEGORIES}
    page = _visible_videos(subcategory_id, include_unapproved)[offset:offset + limit]
    return [
        Video(
            id=video["id"],
            title=video["title"],
            description=video.get("description") or None,
            vimeoId=video.get("vimeoId"),
            vimeoDuration=video.get("vimeoDuration"),
            category=category_names.get(subcategory["categoryId"], ""),
            subcategory=subcategory["name"],
            libraryStatus=video["libraryStatus"],
            createdAt=video["createdAt"],
        )
        for video in page
    ]


def count_subcategory_videos(subcategory_id: str, include_unapproved: bool) -> int:
    return len(_visible_videos(subcategory_id, include_unapproved))


def list_subcategories_with_videos() -> List[Dict]:
    populated = {v["subcategoryId"] for v in VIDEOS}
    return [sub for sub in SUBCATEGORIES if sub["id"] in populated]


def reorder_categories(category_ids: List[str]) -> List[str]:
    """Put the categories in the given order.

    category_ids must name every existing category exactly once.
    """
    by_id = {c["id"]: c for c in CATEGORIES}
    if len(category_ids) != len(set(category_ids)):
        raise ValueError("Duplicate category ids in reorder request")
    unknown = [cid for cid in category_ids if cid not in by_id]
    if unknown:
        raise ValueError(f"Unknown category ids: {', '.join(unknown)}")
    if len(category_ids) != len(by_id):
        raise ValueError("Reorder request must include every category")

    CATEGORIES[:] = [by_id[cid] for cid in category_ids]
    logger.info(f"Categories reordered: {category_ids}")
    return list(category_ids)


def reorder_subcategories(category_id: str, subcategory_ids: List[str]) -> List[str]:
    """Put one category's subcategories in the given order.

    subcategory_ids must name every subcategory of category_id exactly once;
    subcategories of other categories keep their places.
    """
    if not any(c["id"] == category_id for c in CATEGORIES):
        raise ValueError(f"Unknown category id: {category_id}")
    slots = [i for i, sub in enumerate(SUBCATEGORIES) if sub["categoryId"] == category_id]
    by_id = {SUBCATEGORIES[i]["id"]: SUBCATEGORIES[i] for i in slots}
    if len(subcategory_ids) != len(set(subcategory_ids)):
        raise ValueError("Duplicate subcategory ids in reorder request")
    foreign = [sid for sid in subcategory_ids if sid not in by_id]
    if foreign:
        raise ValueError(f"Subcategories not in {category_id}: {', '.join(foreign)}")
    if len(subcategory_ids) != len(by_id):
        raise ValueError(f"Reorder request must include every subcategory of {category_id}")

    for slot, sid in zip(slots, subcategory_ids):
        SUBCATEGORIES[slot] = by_id[sid]
    logger.info(f"Subcategories of {category_id} reordered: {subcategory_ids}")
    return list(subcategory_ids)
