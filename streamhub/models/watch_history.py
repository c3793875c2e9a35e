# streamhub/models/watch_history.py
"""Per-user playback position, one row per (user, episode)"""
from datetime import datetime
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from streamhub.models.base import Base


class WatchHistory(Base):
    __tablename__ = "watch_history"
    __table_args__ = (
        UniqueConstraint('user_id', 'episode_id', name='uq_watch_history_user_episode'),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    episode_id = Column(Integer, ForeignKey("episodes.id", ondelete="CASCADE"), index=True, nullable=False)
    progress = Column(Float, default=0, nullable=False)
    last_watched_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="history")
    episode = relationship("Episode", back_populates="history")

    def __repr__(self):
        return f"<WatchHistory user={self.user_id} episode={self.episode_id} progress={self.progress}>"
