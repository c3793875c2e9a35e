from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class Credentials(BaseModel):
    """Register / login body"""
    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Plain password")

    class Config:
        json_schema_extra = {
            "example": {"username": "viewer1", "password": "s3cret-pass"}
        }


class UserResponse(BaseModel):
    id: int
    username: str
    is_admin: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
