# streamhub/api/deps.py
"""
API dependencies for authentication.

Two independent guards read `Authorization: Bearer <token>`:
- get_current_user: any valid user-tier token
- get_current_admin: a valid admin-tier token that also carries is_admin=true
"""
import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from streamhub.core.exceptions import AuthError, InvalidToken
from streamhub.core.jwt_auth import JWTAuth, TokenTier

log = logging.getLogger("streamhub.auth")

# Security scheme (auto_error off so every failure goes through AuthError)
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    id: int
    username: str
    is_admin: bool = False


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if not credentials or not credentials.credentials:
        raise AuthError("Authentication required")
    return credentials.credentials


def _identity(payload: dict) -> CurrentUser:
    user_id = JWTAuth.get_user_id(payload)
    if user_id is None:
        raise InvalidToken("Invalid token subject")
    return CurrentUser(
        id=user_id,
        username=payload.get("username") or "",
        is_admin=payload.get("is_admin") is True
    )


# ────────────────────────────────────────────
# User guard
# ────────────────────────────────────────────

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """Require a valid user token; the identity is also put on request.state"""
    payload = JWTAuth.verify(_bearer_token(credentials), TokenTier.USER)
    user = _identity(payload)
    request.state.user = user
    return user


# ────────────────────────────────────────────
# Admin guard
# ────────────────────────────────────────────

ADMIN_AUTH_FAILED = "Invalid or missing admin token"


async def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Require an admin-tier token with is_admin=true.

    Missing header, bad signature, expiry and a missing flag all
    produce the same response.
    """
    try:
        payload = JWTAuth.verify(_bearer_token(credentials), TokenTier.ADMIN)
        if payload.get("is_admin") is not True:
            raise InvalidToken("Admin flag missing")
        admin = _identity(payload)
    except AuthError as e:
        log.warning(f"⚠️ Admin auth failed on {request.url.path}: {e.message}")
        raise AuthError(ADMIN_AUTH_FAILED)

    request.state.user = admin
    return admin
