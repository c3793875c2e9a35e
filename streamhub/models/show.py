# streamhub/models/show.py
"""Show model - owns its episodes (cascade delete)"""
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from streamhub.models.base import BaseModel


class Show(BaseModel):
    __tablename__ = "shows"

    title = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=True)
    genres = Column(String(255), nullable=True)  # Comma separated
    year = Column(Integer, nullable=True)
    poster = Column(String(500), nullable=True)
    banner = Column(String(500), nullable=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        index=True,
        nullable=True
    )

    category = relationship("Category", back_populates="shows")
    episodes = relationship(
        "Episode",
        back_populates="show",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<Show {self.title}>"
