# streamhub/models/category.py
"""Catalog category (homepage row)"""
from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from streamhub.models.base import BaseModel


class Category(BaseModel):
    __tablename__ = "categories"

    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    shows = relationship("Show", back_populates="category", passive_deletes=True)

    def __repr__(self):
        return f"<Category {self.name}>"
