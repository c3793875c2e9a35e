from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ProgressUpdate(BaseModel):
    """Playback position report. Both fields are required; presence is
    checked by the history service so a missing field is a 400."""
    episode_id: Optional[int] = Field(None, description="Episode being watched")
    progress: Optional[float] = Field(None, allow_inf_nan=False, description="Position in seconds")

    class Config:
        json_schema_extra = {
            "example": {"episode_id": 12, "progress": 754.5}
        }


class ProgressResponse(BaseModel):
    episode_id: int
    progress: float = 0
    last_watched_at: Optional[datetime] = None


class ProgressUpdateResponse(ProgressResponse):
    ok: bool = True


class HistoryItem(BaseModel):
    """One row of the continue-watching list"""
    episode_id: int
    progress: float
    last_watched_at: datetime
    show_id: int
    show_title: Optional[str] = None
    season: int = 1
    ep_number: int
    title: str
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[float] = None
