# streamhub/core/config.py
"""
Application configuration - loads from environment variables.
Single source of truth for all settings.
"""
import os
import warnings
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables FIRST
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_path = BASE_DIR / '.env'
load_dotenv(dotenv_path=env_path)

# ────────────────────────────────────────────
# Server
# ────────────────────────────────────────────
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR: Path = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# ────────────────────────────────────────────
# Database Configuration
# ────────────────────────────────────────────
DATABASE_PATH: Path = Path(os.getenv("DATABASE_PATH", str(BASE_DIR / "database" / "stream.db")))
DATABASE_URL: str = os.getenv("DATABASE_URL") or f"sqlite:///{DATABASE_PATH}"

# ────────────────────────────────────────────
# Static files & uploads
# ────────────────────────────────────────────
PUBLIC_DIR: Path = Path(os.getenv("PUBLIC_DIR", str(BASE_DIR / "public")))
UPLOAD_DIR: Path = Path(os.getenv("UPLOAD_DIR", str(PUBLIC_DIR / "uploads")))
UPLOAD_URL_PREFIX: str = "/uploads"
UPLOAD_CHUNK_SIZE: int = 1024 * 1024

# ────────────────────────────────────────────
# Authentication
# ────────────────────────────────────────────
ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin@123")

# ────────────────────────────────────────────
# JWT Configuration
# ────────────────────────────────────────────
JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "")
ADMIN_JWT_SECRET_KEY: str = os.getenv("ADMIN_JWT_SECRET_KEY", "")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
USER_TOKEN_LIFETIME_DAYS: int = int(os.getenv("USER_TOKEN_LIFETIME_DAYS", "7"))
ADMIN_TOKEN_LIFETIME_HOURS: int = int(os.getenv("ADMIN_TOKEN_LIFETIME_HOURS", "12"))

if not JWT_SECRET_KEY:
    warnings.warn("JWT_SECRET_KEY not set! Using an insecure development key.")
    JWT_SECRET_KEY = "dev-user-secret-change-me"

if not ADMIN_JWT_SECRET_KEY:
    warnings.warn("ADMIN_JWT_SECRET_KEY not set! Using an insecure development key.")
    ADMIN_JWT_SECRET_KEY = "dev-admin-secret-change-me"

if JWT_SECRET_KEY == ADMIN_JWT_SECRET_KEY:
    raise RuntimeError("JWT_SECRET_KEY and ADMIN_JWT_SECRET_KEY must be different")

# ────────────────────────────────────────────
# Settings Class
# ────────────────────────────────────────────
class Settings:
    DATABASE_URL: str = DATABASE_URL
    HOST: str = HOST
    PORT: int = PORT
    ALLOWED_ORIGINS: list = ALLOWED_ORIGINS
    PUBLIC_DIR: Path = PUBLIC_DIR
    UPLOAD_DIR: Path = UPLOAD_DIR
    UPLOAD_URL_PREFIX: str = UPLOAD_URL_PREFIX
    ADMIN_USERNAME: str = ADMIN_USERNAME
    ADMIN_PASSWORD: str = ADMIN_PASSWORD
    JWT_SECRET_KEY: str = JWT_SECRET_KEY
    ADMIN_JWT_SECRET_KEY: str = ADMIN_JWT_SECRET_KEY
    JWT_ALGORITHM: str = JWT_ALGORITHM
    USER_TOKEN_LIFETIME_DAYS: int = USER_TOKEN_LIFETIME_DAYS
    ADMIN_TOKEN_LIFETIME_HOURS: int = ADMIN_TOKEN_LIFETIME_HOURS
    LOG_LEVEL: str = LOG_LEVEL

settings = Settings()
