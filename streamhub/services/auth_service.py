# streamhub/services/auth_service.py
"""
Auth service - registration, login and admin login.

Duplicate usernames are detected by the database unique constraint,
not by a lookup before the insert.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from streamhub.core.exceptions import (
    ValidationError, ConflictError, InvalidCredentials, ForbiddenError
)
from streamhub.core.jwt_auth import create_user_token, create_admin_token
from streamhub.core.security import hash_password, verify_password
from streamhub.models.user import User

log = logging.getLogger("streamhub.auth")


def _clean_credentials(username: Optional[str], password: Optional[str]) -> Tuple[str, str]:
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("Username and password are required")
    return username, password


class AuthService:
    """Service for account and token operations"""

    def register(self, db: Session, username: str, password: str) -> Tuple[str, User]:
        """
        Create a regular account and issue a user token.

        Raises:
            ValidationError: missing username/password
            ConflictError: username already taken
        """
        username, password = _clean_credentials(username, password)

        user = User(username=username, password_hash=hash_password(password), is_admin=False)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            log.info(f"Registration rejected, username taken: {username}")
            raise ConflictError("Username already taken")
        db.refresh(user)

        log.info(f"✅ Registered user {username} (id={user.id})")
        return create_user_token(user.id, user.username), user

    def authenticate(self, db: Session, username: str, password: str) -> User:
        """Unknown user and wrong password fail with the same error"""
        username, password = _clean_credentials(username, password)
        user = db.query(User).filter(User.username == username).first()
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return user

    def login(self, db: Session, username: str, password: str) -> Tuple[str, User]:
        user = self.authenticate(db, username, password)
        log.info(f"User login: {user.username}")
        return create_user_token(user.id, user.username), user

    def admin_login(self, db: Session, username: str, password: str) -> Tuple[str, User]:
        """
        Issue an admin-tier token.

        Raises:
            InvalidCredentials: unknown user or wrong password
            ForbiddenError: valid account without admin privilege
        """
        user = self.authenticate(db, username, password)
        if not user.is_admin:
            log.warning(f"⚠️ Admin login refused for non-admin account {user.username}")
            raise ForbiddenError("Admin access required")
        log.info(f"🔐 Admin login: {user.username}")
        return create_admin_token(user.id, user.username), user

    def ensure_admin_user(self, db: Session, username: str, password: str, reset_password: bool = False) -> User:
        """
        Create the admin account if missing, or promote an existing one.
        The password is only overwritten when reset_password is set.
        """
        user = db.query(User).filter(User.username == username).first()
        if user is None:
            user = User(username=username, password_hash=hash_password(password), is_admin=True)
            db.add(user)
            log.info(f"✅ Created admin user '{username}'")
        else:
            if not user.is_admin:
                user.is_admin = True
                log.info(f"Promoted '{username}' to admin")
            if reset_password:
                user.password_hash = hash_password(password)
                log.info(f"Password reset for admin '{username}'")
        db.commit()
        db.refresh(user)
        return user
