# streamhub/core/jwt_auth.py
"""
JWT issuing and verification for the two token tiers.

User tokens and admin tokens are signed with different secrets, so a token
from one tier can never be decoded with the other tier's key.
"""
import jwt
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Dict, Any

from streamhub.core.config import (
    JWT_SECRET_KEY, ADMIN_JWT_SECRET_KEY, JWT_ALGORITHM,
    USER_TOKEN_LIFETIME_DAYS, ADMIN_TOKEN_LIFETIME_HOURS
)
from streamhub.core.exceptions import InvalidToken


class TokenTier(str, Enum):
    USER = "user"
    ADMIN = "admin"


_TIER_KEYS = {
    TokenTier.USER: JWT_SECRET_KEY,
    TokenTier.ADMIN: ADMIN_JWT_SECRET_KEY,
}

_TIER_TTL = {
    TokenTier.USER: timedelta(days=USER_TOKEN_LIFETIME_DAYS),
    TokenTier.ADMIN: timedelta(hours=ADMIN_TOKEN_LIFETIME_HOURS),
}


class JWTAuth:
    """JWT Authentication handler"""

    @staticmethod
    def issue(claim: Dict[str, Any], tier: TokenTier, ttl: Optional[timedelta] = None) -> str:
        """
        Sign a claim with the key of the given tier.

        Args:
            claim: Payload, usually {"sub", "username", "is_admin"}
            tier: Which signing key to use
            ttl: Lifetime override (defaults to the tier's configured lifetime)

        Returns:
            Encoded JWT string
        """
        now = datetime.utcnow()
        payload = dict(claim)
        payload["iat"] = now
        payload["exp"] = now + (ttl if ttl is not None else _TIER_TTL[tier])
        return jwt.encode(payload, _TIER_KEYS[tier], algorithm=JWT_ALGORITHM)

    @staticmethod
    def verify(token: str, tier: TokenTier) -> Dict[str, Any]:
        """
        Decode and validate a token against the given tier's key.

        Raises:
            InvalidToken: bad signature, wrong tier, malformed or expired
        """
        if not token:
            raise InvalidToken()
        try:
            return jwt.decode(
                token,
                _TIER_KEYS[tier],
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "sub"]}
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired")
        except jwt.InvalidTokenError:
            raise InvalidToken("Invalid token")

    @staticmethod
    def get_user_id(payload: Dict[str, Any]) -> Optional[int]:
        """Extract the numeric user id from the `sub` claim"""
        sub = payload.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError):
            return None


def create_user_token(user_id: int, username: str) -> str:
    return JWTAuth.issue({"sub": str(user_id), "username": username}, TokenTier.USER)


def create_admin_token(user_id: int, username: str) -> str:
    return JWTAuth.issue(
        {"sub": str(user_id), "username": username, "is_admin": True},
        TokenTier.ADMIN
    )
