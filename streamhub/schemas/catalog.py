# streamhub/schemas/catalog.py
"""
Pydantic schemas for the public catalog and the admin CMS.
Shows, episodes and slides are written through multipart forms,
so only their response shapes live here.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# ────────────────────────────────────────────
# Categories
# ────────────────────────────────────────────

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=120, description="Derived from name when omitted")
    sort_order: int = 0


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=120)
    sort_order: Optional[int] = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    sort_order: int = 0

    class Config:
        from_attributes = True


# ────────────────────────────────────────────
# Shows & Episodes
# ────────────────────────────────────────────

class ShowResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    genres: Optional[str] = None
    year: Optional[int] = None
    poster: Optional[str] = None
    banner: Optional[str] = None
    is_featured: bool = False
    category_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EpisodeResponse(BaseModel):
    id: int
    show_id: int
    season: int = 1
    ep_number: int
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: Optional[float] = None
    created_at: datetime

    class Config:
        from_attributes = True


class EpisodeDetailResponse(EpisodeResponse):
    """Episode with the parent show's title (watch page)"""
    show_title: Optional[str] = None


class ShowDetailResponse(ShowResponse):
    category_name: Optional[str] = None
    episode_count: int = 0


# ────────────────────────────────────────────
# Hero slides
# ────────────────────────────────────────────

class SlideResponse(BaseModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    image: Optional[str] = None
    link_url: Optional[str] = None
    show_id: Optional[int] = None
    sort_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True


# ────────────────────────────────────────────
# Admin dashboard
# ────────────────────────────────────────────

class StatsResponse(BaseModel):
    users: int
    shows: int
    episodes: int
    categories: int
    slides: int


class UploadResponse(BaseModel):
    files: dict = Field(default_factory=dict, description="Field name -> public path")
