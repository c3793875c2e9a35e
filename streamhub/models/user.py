# streamhub/models/user.py
"""
User account model.
Admin privilege is an explicit column, independent of the username.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from streamhub.models.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    history = relationship(
        "WatchHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<User {self.username}>"
