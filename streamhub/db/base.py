# streamhub/db/base.py
"""Import all models so Base.metadata knows every table"""
from streamhub.models.base import Base

from streamhub.models.user import User
from streamhub.models.category import Category
from streamhub.models.show import Show
from streamhub.models.episode import Episode
from streamhub.models.slide import HeroSlide
from streamhub.models.watch_history import WatchHistory

__all__ = ["Base"]
