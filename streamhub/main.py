# streamhub/main.py
"""
FastAPI application: public catalog site, watch history and admin CMS.

Route groups:
- /api/auth     registration and login (user and admin tiers)
- /api          public catalog (shows, episodes, search, slides)
- /api/history  watch progress (user token)
- /api/admin    content management (admin token)
Static files are served from PUBLIC_DIR, uploads from UPLOAD_DIR.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from streamhub.core.config import settings
from streamhub.core.exceptions import register_exception_handlers
from streamhub.core.logging_config import setup_logging
from streamhub.db.session import init_db, close_db, get_db_session, test_db_connection
from streamhub.api.v1.router import api_router
from streamhub.services import get_auth_service

setup_logging()
log = logging.getLogger("streamhub")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the admin account on startup, release the pool on shutdown"""
    log.info("🚀 Application starting")
    init_db()
    with get_db_session() as db:
        get_auth_service().ensure_admin_user(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    log.info("✅ Startup complete")
    try:
        yield
    finally:
        close_db()
        log.info("👋 Application stopped")


# FastAPI app
app = FastAPI(
    title="Streamhub",
    description="Streaming catalog site with watch history and admin CMS",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ────────────────────────────────────────────
# CORS Configuration
# ────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/healthz", tags=["System"])
def health():
    """Health check endpoint"""
    db_ok = test_db_connection()
    return {
        "status": "ok" if db_ok else "degraded",
        "database_ok": db_ok,
    }


# ────────────────────────────────────────────
# Static files (mounted last so API routes win)
# ────────────────────────────────────────────
settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
settings.PUBLIC_DIR.mkdir(parents=True, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=str(settings.UPLOAD_DIR)), name="uploads")
app.mount("/", StaticFiles(directory=str(settings.PUBLIC_DIR), html=True), name="public")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
