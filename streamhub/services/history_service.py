# streamhub/services/history_service.py
"""
Watch history service - playback progress per (user, episode).

Progress writes are a single INSERT ... ON CONFLICT DO UPDATE keyed on the
(user_id, episode_id) unique constraint, so two tabs reporting progress for
the same episode never create two rows.
"""
import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from streamhub.core.exceptions import ValidationError, NotFoundError, StorageError
from streamhub.models.episode import Episode
from streamhub.models.show import Show
from streamhub.models.watch_history import WatchHistory

log = logging.getLogger("streamhub.history")

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _upsert_statement(dialect_name: str, values: Dict[str, Any]):
    insert = _UPSERT_DIALECTS.get(dialect_name)
    if insert is None:
        raise StorageError(f"Progress upsert not supported on '{dialect_name}'")
    stmt = insert(WatchHistory).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=[WatchHistory.user_id, WatchHistory.episode_id],
        set_={
            "progress": stmt.excluded.progress,
            "last_watched_at": stmt.excluded.last_watched_at,
        }
    )


class HistoryService:
    """Service for watch progress operations"""

    def update_progress(
        self,
        db: Session,
        user_id: int,
        episode_id: Optional[int],
        progress: Optional[float]
    ) -> Dict[str, Any]:
        """
        Record the playback position for an episode.

        Raises:
            ValidationError: episode_id or progress missing, progress negative or not finite
            NotFoundError: episode does not exist
        """
        if episode_id is None or progress is None:
            raise ValidationError("episode_id and progress are required")
        if not math.isfinite(progress):
            raise ValidationError("progress must be a finite number")
        if progress < 0:
            raise ValidationError("progress must not be negative")
        if db.get(Episode, episode_id) is None:
            raise NotFoundError("Episode not found")

        now = datetime.utcnow()
        stmt = _upsert_statement(db.get_bind().dialect.name, {
            "user_id": user_id,
            "episode_id": episode_id,
            "progress": float(progress),
            "last_watched_at": now,
        })
        db.execute(stmt)
        db.commit()

        log.debug(f"Progress user={user_id} episode={episode_id} -> {progress}")
        return {"episode_id": episode_id, "progress": float(progress), "last_watched_at": now}

    def get_progress(self, db: Session, user_id: int, episode_id: int) -> Dict[str, Any]:
        """Stored progress, or a zero-progress placeholder when never watched"""
        row = db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id,
            WatchHistory.episode_id == episode_id
        ).first()

        if row is None:
            return {"episode_id": episode_id, "progress": 0.0, "last_watched_at": None}
        return {
            "episode_id": row.episode_id,
            "progress": row.progress,
            "last_watched_at": row.last_watched_at,
        }

    def list_history(self, db: Session, user_id: int, limit: int = 50) -> List[Dict[str, Any]]:
        """Continue-watching list, most recently watched first"""
        rows = db.query(WatchHistory, Episode, Show).join(
            Episode, WatchHistory.episode_id == Episode.id
        ).join(
            Show, Episode.show_id == Show.id
        ).filter(
            WatchHistory.user_id == user_id
        ).order_by(
            desc(WatchHistory.last_watched_at), desc(WatchHistory.id)
        ).limit(limit).all()

        return [
            {
                "episode_id": entry.episode_id,
                "progress": entry.progress,
                "last_watched_at": entry.last_watched_at,
                "show_id": show.id,
                "show_title": show.title,
                "season": episode.season,
                "ep_number": episode.ep_number,
                "title": episode.title,
                "thumbnail": episode.thumbnail,
                "video_url": episode.video_url,
                "duration": episode.duration,
            }
            for entry, episode, show in rows
        ]

    def remove_entry(self, db: Session, user_id: int, episode_id: int) -> bool:
        deleted = db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id,
            WatchHistory.episode_id == episode_id
        ).delete(synchronize_session=False)
        db.commit()
        return deleted > 0

    def clear_history(self, db: Session, user_id: int) -> int:
        deleted = db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id
        ).delete(synchronize_session=False)
        db.commit()
        log.info(f"Cleared {deleted} history entries for user {user_id}")
        return deleted
