# streamhub/services/catalog_service.py
"""
Catalog service - categories, shows, episodes and hero slides.

Public read queries and the admin CMS writes both go through here.
Image paths come from UploadService; replaced or orphaned images are
removed from disk best-effort after the database change is committed.
"""
import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from streamhub.core.exceptions import ValidationError, ConflictError, NotFoundError
from streamhub.models.category import Category
from streamhub.models.episode import Episode
from streamhub.models.show import Show
from streamhub.models.slide import HeroSlide
from streamhub.models.user import User
from streamhub.services.upload_service import UploadService

log = logging.getLogger("streamhub.catalog")

SHOW_FIELDS = {"title", "description", "genres", "year", "poster", "banner", "is_featured", "category_id"}
EPISODE_FIELDS = {"show_id", "season", "ep_number", "title", "description", "video_url", "thumbnail", "duration"}
SLIDE_FIELDS = {"title", "subtitle", "image", "link_url", "show_id", "sort_order", "is_active"}

SHOW_IMAGE_FIELDS = ("poster", "banner")


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "category"


def escape_like(value: str) -> str:
    """Make LIKE wildcards in user input match literally (escape char is backslash)"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _pick(data: Dict[str, Any], allowed: set) -> Dict[str, Any]:
    """Keep known fields that were actually provided"""
    return {k: v for k, v in data.items() if k in allowed and v is not None}


class CatalogService:
    """Service for catalog operations"""

    def __init__(self, uploads: Optional[UploadService] = None):
        self.uploads = uploads or UploadService()

    # ────────────────────────────────────────────
    # Helpers
    # ────────────────────────────────────────────

    def _commit(self, db: Session, conflict_message: str):
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            log.info(f"Integrity error: {e.orig}")
            raise ConflictError(conflict_message)

    def _remove_files(self, paths):
        for path in paths:
            if path:
                self.uploads.remove(path)

    def _require_category(self, db: Session, category_id: Optional[int]):
        if category_id is not None and db.get(Category, category_id) is None:
            raise ValidationError(f"Category {category_id} does not exist")

    # ────────────────────────────────────────────
    # Categories
    # ────────────────────────────────────────────

    def list_categories(self, db: Session) -> List[Category]:
        return db.query(Category).order_by(Category.sort_order, Category.name).all()

    def get_category(self, db: Session, category_id: int) -> Category:
        category = db.get(Category, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def create_category(self, db: Session, name: str, slug: Optional[str] = None, sort_order: int = 0) -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        category = Category(name=name, slug=slugify(slug or name), sort_order=sort_order or 0)
        db.add(category)
        self._commit(db, "Category already exists")
        db.refresh(category)
        log.info(f"✅ Category created: {category.name}")
        return category

    def update_category(self, db: Session, category_id: int, data: Dict[str, Any]) -> Category:
        category = self.get_category(db, category_id)
        if data.get("name") is not None:
            name = data["name"].strip()
            if not name:
                raise ValidationError("name is required")
            category.name = name
        if data.get("slug") is not None:
            category.slug = slugify(data["slug"])
        if data.get("sort_order") is not None:
            category.sort_order = data["sort_order"]
        self._commit(db, "Category already exists")
        db.refresh(category)
        return category

    def delete_category(self, db: Session, category_id: int):
        """Shows in the category stay, with category_id cleared"""
        category = self.get_category(db, category_id)
        db.delete(category)
        db.commit()
        log.info(f"🗑️ Category deleted: {category_id}")

    def shows_in_category(self, db: Session, category_id: int) -> List[Show]:
        self.get_category(db, category_id)
        return db.query(Show).filter(Show.category_id == category_id).order_by(Show.title).all()

    # ────────────────────────────────────────────
    # Shows
    # ────────────────────────────────────────────

    def list_shows(
        self,
        db: Session,
        category_id: Optional[int] = None,
        featured: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Show]:
        query = db.query(Show)
        if category_id is not None:
            query = query.filter(Show.category_id == category_id)
        if featured is not None:
            query = query.filter(Show.is_featured == featured)
        return query.order_by(Show.created_at.desc(), Show.id.desc()).offset(skip).limit(limit).all()

    def get_show(self, db: Session, show_id: int) -> Show:
        show = db.get(Show, show_id)
        if not show:
            raise NotFoundError("Show not found")
        return show

    def show_detail(self, db: Session, show_id: int) -> Dict[str, Any]:
        show = self.get_show(db, show_id)
        episode_count = db.query(func.count(Episode.id)).filter(Episode.show_id == show_id).scalar()
        detail = show.to_dict()
        detail["category_name"] = show.category.name if show.category else None
        detail["episode_count"] = episode_count or 0
        return detail

    def create_show(self, db: Session, data: Dict[str, Any]) -> Show:
        fields = _pick(data, SHOW_FIELDS)
        if not (fields.get("title") or "").strip():
            raise ValidationError("title is required")
        self._require_category(db, fields.get("category_id"))

        show = Show(**fields)
        db.add(show)
        db.commit()
        db.refresh(show)
        log.info(f"✅ Show created: {show.title} (id={show.id})")
        return show

    def update_show(self, db: Session, show_id: int, data: Dict[str, Any]) -> Show:
        show = self.get_show(db, show_id)
        fields = _pick(data, SHOW_FIELDS)
        if "title" in fields and not fields["title"].strip():
            raise ValidationError("title must not be empty")
        self._require_category(db, fields.get("category_id"))

        replaced = [
            getattr(show, name) for name in SHOW_IMAGE_FIELDS
            if name in fields and getattr(show, name) != fields[name]
        ]
        for field, value in fields.items():
            setattr(show, field, value)
        db.commit()
        db.refresh(show)
        self._remove_files(replaced)
        return show

    def delete_show(self, db: Session, show_id: int):
        """Deletes the show; episodes (and their history) cascade in the database"""
        show = self.get_show(db, show_id)
        thumbnails = [
            t for (t,) in db.query(Episode.thumbnail).filter(Episode.show_id == show_id).all()
        ]
        images = [show.poster, show.banner] + thumbnails

        db.delete(show)
        db.commit()
        self._remove_files(images)
        log.info(f"🗑️ Show deleted: {show_id} ({len(thumbnails)} episodes)")

    def search_shows(self, db: Session, q: Optional[str], limit: int = 50) -> List[Show]:
        term = (q or "").strip()
        if not term:
            return []
        pattern = f"%{escape_like(term)}%"
        return db.query(Show).filter(
            or_(
                Show.title.ilike(pattern, escape="\\"),
                Show.description.ilike(pattern, escape="\\"),
                Show.genres.ilike(pattern, escape="\\")
            )
        ).order_by(Show.title).limit(limit).all()

    # ────────────────────────────────────────────
    # Episodes
    # ────────────────────────────────────────────

    def list_episodes(self, db: Session, show_id: int) -> List[Episode]:
        self.get_show(db, show_id)
        return db.query(Episode).filter(
            Episode.show_id == show_id
        ).order_by(Episode.season, Episode.ep_number).all()

    def get_episode(self, db: Session, episode_id: int) -> Episode:
        episode = db.get(Episode, episode_id)
        if not episode:
            raise NotFoundError("Episode not found")
        return episode

    def episode_detail(self, db: Session, episode_id: int) -> Dict[str, Any]:
        episode = self.get_episode(db, episode_id)
        detail = episode.to_dict()
        detail["show_title"] = episode.show.title if episode.show else None
        return detail

    def create_episode(self, db: Session, data: Dict[str, Any]) -> Episode:
        fields = _pick(data, EPISODE_FIELDS)
        if fields.get("show_id") is None or fields.get("ep_number") is None:
            raise ValidationError("show_id and ep_number are required")
        if not (fields.get("title") or "").strip():
            raise ValidationError("title is required")
        self.get_show(db, fields["show_id"])

        episode = Episode(**fields)
        db.add(episode)
        db.commit()
        db.refresh(episode)
        log.info(f"✅ Episode created: show={episode.show_id} ep={episode.ep_number}")
        return episode

    def update_episode(self, db: Session, episode_id: int, data: Dict[str, Any]) -> Episode:
        episode = self.get_episode(db, episode_id)
        fields = _pick(data, EPISODE_FIELDS)
        if "show_id" in fields:
            self.get_show(db, fields["show_id"])

        replaced = []
        if "thumbnail" in fields and episode.thumbnail != fields["thumbnail"]:
            replaced.append(episode.thumbnail)
        for field, value in fields.items():
            setattr(episode, field, value)
        db.commit()
        db.refresh(episode)
        self._remove_files(replaced)
        return episode

    def delete_episode(self, db: Session, episode_id: int):
        episode = self.get_episode(db, episode_id)
        thumbnail = episode.thumbnail
        db.delete(episode)
        db.commit()
        self._remove_files([thumbnail])

    # ────────────────────────────────────────────
    # Hero slides
    # ────────────────────────────────────────────

    def list_slides(self, db: Session, active_only: bool = True) -> List[HeroSlide]:
        query = db.query(HeroSlide)
        if active_only:
            query = query.filter(HeroSlide.is_active == True)
        return query.order_by(HeroSlide.sort_order, HeroSlide.id).all()

    def get_slide(self, db: Session, slide_id: int) -> HeroSlide:
        slide = db.get(HeroSlide, slide_id)
        if not slide:
            raise NotFoundError("Slide not found")
        return slide

    def create_slide(self, db: Session, data: Dict[str, Any]) -> HeroSlide:
        fields = _pick(data, SLIDE_FIELDS)
        if not (fields.get("title") or "").strip():
            raise ValidationError("title is required")
        if fields.get("show_id") is not None:
            self.get_show(db, fields["show_id"])

        slide = HeroSlide(**fields)
        db.add(slide)
        db.commit()
        db.refresh(slide)
        return slide

    def update_slide(self, db: Session, slide_id: int, data: Dict[str, Any]) -> HeroSlide:
        slide = self.get_slide(db, slide_id)
        fields = _pick(data, SLIDE_FIELDS)
        if fields.get("show_id") is not None:
            self.get_show(db, fields["show_id"])

        replaced = []
        if "image" in fields and slide.image != fields["image"]:
            replaced.append(slide.image)
        for field, value in fields.items():
            setattr(slide, field, value)
        db.commit()
        db.refresh(slide)
        self._remove_files(replaced)
        return slide

    def delete_slide(self, db: Session, slide_id: int):
        slide = self.get_slide(db, slide_id)
        image = slide.image
        db.delete(slide)
        db.commit()
        self._remove_files([image])

    # ────────────────────────────────────────────
    # Admin dashboard
    # ────────────────────────────────────────────

    def stats(self, db: Session) -> Dict[str, int]:
        return {
            "users": db.query(func.count(User.id)).scalar() or 0,
            "shows": db.query(func.count(Show.id)).scalar() or 0,
            "episodes": db.query(func.count(Episode.id)).scalar() or 0,
            "categories": db.query(func.count(Category.id)).scalar() or 0,
            "slides": db.query(func.count(HeroSlide.id)).scalar() or 0,
        }

    def list_users(self, db: Session, skip: int = 0, limit: int = 100) -> List[User]:
        return db.query(User).order_by(User.id).offset(skip).limit(limit).all()
