"""Data models for the video library API."""

from pydantic import BaseModel
from typing import List, Optional
from enum import Enum


class LibraryStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"


class UserProfile(BaseModel):
    id: Optional[str] = None
    roleType: str
    team: Optional[str] = None
    area: Optional[str] = None
    region: Optional[str] = None


class Subcategory(BaseModel):
    id: str
    name: str
    videoCount: int


class CategorySummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    position: int
    subcategories: List[Subcategory]


class Video(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    vimeoId: Optional[str] = None
    vimeoDuration: Optional[int] = None
    category: str
    subcategory: str
    libraryStatus: LibraryStatus
    createdAt: str


class CategoriesResponse(BaseModel):
    success: bool
    data: List[CategorySummary]
    cached: bool


class VideoListResponse(BaseModel):
    success: bool
    data: List[Video]
    cached: bool
    total: int


class SubcategoryCountResponse(BaseModel):
    success: bool
    subcategoryId: str
    count: int
    cached: bool


class ReorderItem(BaseModel):
    id: str


class ReorderRequest(BaseModel):
    type: str
    items: List[ReorderItem]
    categoryId: Optional[str] = None


class ReorderResponse(BaseModel):
    success: bool
    message: str
    order: List[str]
    invalidated: int


class CacheWarmResponse(BaseModel):
    success: bool
    message: str
    warmed: int
    total: int


class CacheStatsModel(BaseModel):
    total: int
    active: int
    expired: int


class CacheStatsResponse(BaseModel):
    success: bool
    stats: CacheStatsModel
    timestamp: str


class CacheClearResponse(BaseModel):
    success: bool
    message: str
    statsBefore: CacheStatsModel
    statsAfter: CacheStatsModel
    clearedCount: int
    timestamp: str
