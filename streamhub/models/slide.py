# streamhub/models/slide.py
"""Homepage hero slide"""
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from streamhub.models.base import BaseModel


class HeroSlide(BaseModel):
    __tablename__ = "hero_slides"

    title = Column(String(255), nullable=False)
    subtitle = Column(String(500), nullable=True)
    image = Column(String(500), nullable=True)
    link_url = Column(String(1000), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    show_id = Column(Integer, ForeignKey("shows.id", ondelete="SET NULL"), nullable=True)

    show = relationship("Show")

    def __repr__(self):
        return f"<HeroSlide {self.title}>"
