# streamhub/models/episode.py
"""Episode model - video_url points to an external host"""
from sqlalchemy import Column, String, Text, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship
from streamhub.models.base import BaseModel


class Episode(BaseModel):
    __tablename__ = "episodes"

    show_id = Column(
        Integer,
        ForeignKey("shows.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    season = Column(Integer, default=1, nullable=False)
    ep_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(String(1000), nullable=True)
    thumbnail = Column(String(500), nullable=True)
    duration = Column(Float, nullable=True)  # seconds

    show = relationship("Show", back_populates="episodes")
    history = relationship(
        "WatchHistory",
        back_populates="episode",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<Episode {self.show_id}:{self.ep_number} {self.title}>"
