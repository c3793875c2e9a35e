# streamhub/api/v1/history.py
"""Watch history endpoints (user token required)"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from streamhub.api.deps import CurrentUser, get_current_user
from streamhub.db.session import get_db
from streamhub.schemas.history import (
    ProgressUpdate, ProgressResponse, ProgressUpdateResponse, HistoryItem
)
from streamhub.services import get_history_service

router = APIRouter()


@router.get("", response_model=List[HistoryItem])
def list_history(
    limit: int = Query(50, ge=1, le=200),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service = Depends(get_history_service)
):
    """Continue-watching list, most recent first"""
    return service.list_history(db, user.id, limit=limit)


@router.post("/update", response_model=ProgressUpdateResponse)
def update_progress(
    data: ProgressUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service = Depends(get_history_service)
):
    """Record playback position for an episode"""
    return service.update_progress(db, user.id, data.episode_id, data.progress)


@router.get("/{episode_id}", response_model=ProgressResponse)
def get_progress(
    episode_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service = Depends(get_history_service)
):
    """Stored position, or 0 when the episode was never watched"""
    return service.get_progress(db, user.id, episode_id)


@router.delete("/{episode_id}")
def remove_history_entry(
    episode_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service = Depends(get_history_service)
):
    removed = service.remove_entry(db, user.id, episode_id)
    return {"ok": True, "removed": removed}


@router.delete("")
def clear_history(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service = Depends(get_history_service)
):
    removed = service.clear_history(db, user.id)
    return {"ok": True, "removed": removed}
