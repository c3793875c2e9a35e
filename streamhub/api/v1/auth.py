# streamhub/api/v1/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from streamhub.api.deps import CurrentUser, get_current_user
from streamhub.core.exceptions import AuthError
from streamhub.db.session import get_db
from streamhub.models.user import User
from streamhub.schemas.auth import Credentials, TokenResponse, UserResponse
from streamhub.services import get_auth_service

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    data: Credentials,
    db: Session = Depends(get_db),
    service = Depends(get_auth_service)
):
    """Create an account and return a user token"""
    token, user = service.register(db, data.username, data.password)
    return {"token": token, "user": user}


@router.post("/login", response_model=TokenResponse)
def login(
    data: Credentials,
    db: Session = Depends(get_db),
    service = Depends(get_auth_service)
):
    """Exchange username/password for a user token"""
    token, user = service.login(db, data.username, data.password)
    return {"token": token, "user": user}


@router.post("/admin/login", response_model=TokenResponse)
def admin_login(
    data: Credentials,
    db: Session = Depends(get_db),
    service = Depends(get_auth_service)
):
    """Exchange admin credentials for a short-lived admin token"""
    token, user = service.admin_login(db, data.username, data.password)
    return {"token": token, "user": user}


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get current user info"""
    user = db.get(User, current_user.id)
    if not user:
        # Account removed after the token was issued
        raise AuthError("Account no longer exists")
    return user
