# streamhub/api/v1/admin.py
"""
Admin CMS endpoints.
Every route here sits behind the admin guard (see router.py).

Shows, episodes and slides are written with multipart forms so images can
be uploaded in the same request; the stored value is the public path.
"""
import logging
from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile as StarletteUploadFile
from typing import List, Optional

from streamhub.api.deps import CurrentUser, get_current_admin
from streamhub.core.exceptions import ValidationError
from streamhub.db.session import get_db
from streamhub.schemas.auth import UserResponse
from streamhub.schemas.catalog import (
    CategoryCreate, CategoryUpdate, CategoryResponse,
    ShowResponse, EpisodeResponse, SlideResponse,
    StatsResponse, UploadResponse
)
from streamhub.services import get_catalog_service, get_upload_service

router = APIRouter()
log = logging.getLogger("streamhub.admin")


# ────────────────────────────────────────────
# Dashboard
# ────────────────────────────────────────────

@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    """Row counts for the dashboard cards"""
    return service.stats(db)


@router.get("/users", response_model=List[UserResponse])
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    return service.list_users(db, skip=skip, limit=limit)


# ────────────────────────────────────────────
# Categories
# ────────────────────────────────────────────

@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    return service.list_categories(db)


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    return service.create_category(db, data.name, data.slug, data.sort_order)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    return service.update_category(db, category_id, data.dict(exclude_unset=True))


@router.delete("/categories/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    service.delete_category(db, category_id)
    return {"ok": True}


# ────────────────────────────────────────────
# Shows
# ────────────────────────────────────────────

@router.get("/shows", response_model=List[ShowResponse])
def list_shows(
    skip: int = Query(0, ge=0),
    limit: int = Query(500, ge=1, le=1000),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    return service.list_shows(db, skip=skip, limit=limit)


@router.post("/shows", response_model=ShowResponse, status_code=201)
async def create_show(
    title: str = Form(...),
    description: Optional[str] = Form(None),
    genres: Optional[str] = Form(None),
    year: Optional[int] = Form(None),
    category_id: Optional[int] = Form(None),
    is_featured: bool = Form(False),
    poster: Optional[UploadFile] = File(None),
    banner: Optional[UploadFile] = File(None),
    admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service),
    uploads = Depends(get_upload_service)
):
    """Create a show with optional poster/banner images"""
    images = await uploads.save_fields([("poster", poster), ("banner", banner)])
    show = service.create_show(db, {
        "title": title,
        "description": description,
        "genres": genres,
        "year": year,
        "category_id": category_id,
        "is_featured": is_featured,
        **images,
    })
    log.info(f"Show {show.id} created by {admin.username}")
    return show


@router.put("/shows/{show_id}", response_model=ShowResponse)
async def update_show(
    show_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    genres: Optional[str] = Form(None),
    year: Optional[int] = Form(None),
    category_id: Optional[int] = Form(None),
    is_featured: Optional[bool] = Form(None),
    poster: Optional[UploadFile] = File(None),
    banner: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service),
    uploads = Depends(get_upload_service)
):
    """Update provided fields; new images replace the old files"""
    service.get_show(db, show_id)
    images = await uploads.save_fields([("poster", poster), ("banner", banner)])
    return service.update_show(db, show_id, {
        "title": title,
        "description": description,
        "genres": genres,
        "year": year,
        "category_id": category_id,
        "is_featured": is_featured,
        **images,
    })


@router.delete("/shows/{show_id}")
def delete_show(
    show_id: int,
    admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service)
):
    """Delete a show and all of its episodes"""
    service.delete_show(db, show_id)
    log.info(f"Show {show_id} deleted by {admin.username}")
    return {"ok": True}


# ────────────────────────────────────────────
# Episodes
# ────────────────────────────────────────────

@router.get("/shows/{show_id}/episodes", response_model=List[EpisodeResponse])
def list_episodes(show_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    return service.list_episodes(db, show_id)


@router.post("/episodes", response_model=EpisodeResponse, status_code=201)
async def create_episode(
    show_id: int = Form(...),
    ep_number: int = Form(...),
    title: str = Form(...),
    season: int = Form(1),
    description: Optional[str] = Form(None),
    video_url: Optional[str] = Form(None),
    duration: Optional[float] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service),
    uploads = Depends(get_upload_service)
):
    """Add an episode; video_url is an external link"""
    service.get_show(db, show_id)
    images = await uploads.save_fields([("thumbnail", thumbnail)])
    return service.create_episode(db, {
        "show_id": show_id,
        "ep_number": ep_number,
        "title": title,
        "season": season,
        "description": description,
        "video_url": video_url,
        "duration": duration,
        **images,
    })


@router.put("/episodes/{episode_id}", response_model=EpisodeResponse)
async def update_episode(
    episode_id: int,
    show_id: Optional[int] = Form(None),
    ep_number: Optional[int] = Form(None),
    title: Optional[str] = Form(None),
    season: Optional[int] = Form(None),
    description: Optional[str] = Form(None),
    video_url: Optional[str] = Form(None),
    duration: Optional[float] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service),
    uploads = Depends(get_upload_service)
):
    service.get_episode(db, episode_id)
    images = await uploads.save_fields([("thumbnail", thumbnail)])
    return service.update_episode(db, episode_id, {
        "show_id": show_id,
        "ep_number": ep_number,
        "title": title,
        "season": season,
        "description": description,
        "video_url": video_url,
        "duration": duration,
        **images,
    })


@router.delete("/episodes/{episode_id}")
def delete_episode(episode_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    service.delete_episode(db, episode_id)
    return {"ok": True}


# ────────────────────────────────────────────
# Hero slides
# ────────────────────────────────────────────

@router.get("/slides", response_model=List[SlideResponse])
def list_slides(db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    """All slides, including inactive ones"""
    return service.list_slides(db, active_only=False)


@router.post("/slides", response_model=SlideResponse, status_code=201)
async def create_slide(
    title: str = Form(...),
    subtitle: Optional[str] = Form(None),
    link_url: Optional[str] = Form(None),
    show_id: Optional[int] = Form(None),
    sort_order: int = Form(0),
    is_active: bool = Form(True),
    hero_image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service),
    uploads = Depends(get_upload_service)
):
    images = await uploads.save_fields([("hero_image", hero_image)])
    return service.create_slide(db, {
        "title": title,
        "subtitle": subtitle,
        "link_url": link_url,
        "show_id": show_id,
        "sort_order": sort_order,
        "is_active": is_active,
        "image": images.get("hero_image"),
    })


@router.put("/slides/{slide_id}", response_model=SlideResponse)
async def update_slide(
    slide_id: int,
    title: Optional[str] = Form(None),
    subtitle: Optional[str] = Form(None),
    link_url: Optional[str] = Form(None),
    show_id: Optional[int] = Form(None),
    sort_order: Optional[int] = Form(None),
    is_active: Optional[bool] = Form(None),
    hero_image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    service = Depends(get_catalog_service),
    uploads = Depends(get_upload_service)
):
    service.get_slide(db, slide_id)
    images = await uploads.save_fields([("hero_image", hero_image)])
    return service.update_slide(db, slide_id, {
        "title": title,
        "subtitle": subtitle,
        "link_url": link_url,
        "show_id": show_id,
        "sort_order": sort_order,
        "is_active": is_active,
        "image": images.get("hero_image"),
    })


@router.delete("/slides/{slide_id}")
def delete_slide(slide_id: int, db: Session = Depends(get_db), service = Depends(get_catalog_service)):
    service.delete_slide(db, slide_id)
    return {"ok": True}


# ────────────────────────────────────────────
# Generic upload
# ────────────────────────────────────────────

@router.post("/upload", response_model=UploadResponse)
async def upload_files(request: Request, uploads = Depends(get_upload_service)):
    """
    Store every file field of a multipart request.
    The directory is chosen by field name (poster/banner/thumbnail, hero_image, other).
    """
    form = await request.form()
    files = [
        (field, value) for field, value in form.multi_items()
        if isinstance(value, StarletteUploadFile)
    ]
    if not files:
        raise ValidationError("No files provided")
    fields = [field for field, _ in files]
    duplicates = sorted({field for field in fields if fields.count(field) > 1})
    if duplicates:
        raise ValidationError(f"Duplicate file fields: {', '.join(duplicates)}")
    saved = await uploads.save_fields(files)
    return {"files": saved}
