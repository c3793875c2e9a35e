"""
Pytest fixtures and configuration for streamhub tests.

Environment is pointed at a throwaway directory before anything from
streamhub is imported, since configuration is read at import time.
"""
import os
import tempfile
from pathlib import Path

import pytest

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="streamhub-tests-"))

os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_ROOT / 'test.db'}"
os.environ["PUBLIC_DIR"] = str(_TMP_ROOT / "public")
os.environ["UPLOAD_DIR"] = str(_TMP_ROOT / "uploads")
os.environ["LOG_DIR"] = str(_TMP_ROOT / "logs")
os.environ["JWT_SECRET_KEY"] = "test-user-secret"
os.environ["ADMIN_JWT_SECRET_KEY"] = "test-admin-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-pass"

from fastapi.testclient import TestClient  # noqa: E402

from streamhub.db.base import Base  # noqa: E402
from streamhub.db.session import engine, SessionLocal  # noqa: E402
from streamhub.main import app  # noqa: E402

ADMIN_CREDENTIALS = {"username": "admin", "password": "admin-pass"}


@pytest.fixture(scope="session")
def upload_root():
    return Path(os.environ["UPLOAD_DIR"])


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh tables for every test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client(reset_database):
    """TestClient with startup (table creation + admin seed) run"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(reset_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client):
    response = client.post("/api/auth/register", json={"username": "viewer", "password": "watch-me"})
    assert response.status_code == 201
    return response.json()["token"]


@pytest.fixture
def user_headers(user_token):
    return bearer(user_token)


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/auth/admin/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200
    return bearer(response.json()["token"])


@pytest.fixture
def sample_catalog(db):
    """One category, two shows, three episodes, two slides (one inactive)"""
    from streamhub.models.category import Category
    from streamhub.models.show import Show
    from streamhub.models.episode import Episode
    from streamhub.models.slide import HeroSlide

    drama = Category(name="Drama", slug="drama", sort_order=1)
    db.add(drama)
    db.flush()

    harbor = Show(
        title="Harbor Lights",
        description="A fishing town keeps its secrets.",
        genres="Drama, Mystery",
        year=2021,
        category_id=drama.id,
        is_featured=True,
    )
    orbit = Show(title="Low Orbit", description="Engineers on a failing station.", genres="Sci-Fi")
    db.add_all([harbor, orbit])
    db.flush()

    episodes = [
        Episode(show_id=harbor.id, season=1, ep_number=2, title="Undertow", duration=2700),
        Episode(show_id=harbor.id, season=1, ep_number=1, title="Pilot", duration=2400,
                video_url="https://drive.example.com/file/pilot"),
        Episode(show_id=orbit.id, season=1, ep_number=1, title="Launch", duration=1800),
    ]
    db.add_all(episodes)
    db.add_all([
        HeroSlide(title="Now streaming", show_id=harbor.id, sort_order=2),
        HeroSlide(title="Retired promo", sort_order=1, is_active=False),
    ])
    db.commit()

    return {
        "category_id": drama.id,
        "harbor_id": harbor.id,
        "orbit_id": orbit.id,
        "episode_ids": [e.id for e in episodes],
    }
