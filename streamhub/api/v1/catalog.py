# streamhub/api/v1/catalog.py
"""
Public catalog endpoints (no authentication).
Shows, episodes, categories, search and homepage slides.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from streamhub.db.session import get_db
from streamhub.schemas.catalog import (
    CategoryResponse, ShowResponse, ShowDetailResponse,
    EpisodeResponse, EpisodeDetailResponse, SlideResponse
)
from streamhub.services import get_catalog_service

router = APIRouter()


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    """List categories in homepage order"""
    return service.list_categories(db)


@router.get("/categories/{category_id}/shows", response_model=List[ShowResponse])
def list_category_shows(
    category_id: int,
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    return service.shows_in_category(db, category_id)


@router.get("/shows", response_model=List[ShowResponse])
def list_shows(
    category_id: Optional[int] = None,
    featured: Optional[bool] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    """List shows, newest first"""
    return service.list_shows(db, category_id=category_id, featured=featured, skip=skip, limit=limit)


@router.get("/shows/{show_id}", response_model=ShowDetailResponse)
def get_show(show_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    """Get show details"""
    return service.show_detail(db, show_id)


@router.get("/shows/{show_id}/episodes", response_model=List[EpisodeResponse])
def list_show_episodes(show_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    """Episodes of a show ordered by season and number"""
    return service.list_episodes(db, show_id)


@router.get("/episodes/{episode_id}", response_model=EpisodeDetailResponse)
def get_episode(episode_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    return service.episode_detail(db, episode_id)


@router.get("/search", response_model=List[ShowResponse])
def search(
    q: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    """Search shows by title, description or genre"""
    return service.search_shows(db, q, limit=limit)


@router.get("/slides", response_model=List[SlideResponse])
def list_slides(db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    """Active hero slides"""
    return service.list_slides(db, active_only=True)
