"""
Tests for the admin CMS: CRUD, uploads and cascade deletes
"""
from streamhub.models.episode import Episode
from streamhub.models.show import Show
from streamhub.models.watch_history import WatchHistory

JPEG = ("poster.JPG", b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")


def _disk_path(upload_root, public_path):
    assert public_path.startswith("/uploads/")
    return upload_root / public_path[len("/uploads/"):]


class TestDashboard:

    def test_stats_counts_rows(self, client, admin_headers, sample_catalog):
        stats = client.get("/api/admin/stats", headers=admin_headers).json()

        # admin account is seeded at startup
        assert stats == {"users": 1, "shows": 2, "episodes": 3, "categories": 1, "slides": 2}

    def test_users_list(self, client, admin_headers, user_token):
        users = client.get("/api/admin/users", headers=admin_headers).json()

        assert {u["username"]: u["is_admin"] for u in users} == {"admin": True, "viewer": False}


class TestCategories:

    def test_crud(self, client, admin_headers):
        created = client.post("/api/admin/categories", json={"name": "New Releases"}, headers=admin_headers)
        assert created.status_code == 201
        category = created.json()
        assert category["slug"] == "new-releases"

        updated = client.put(
            f"/api/admin/categories/{category['id']}",
            json={"sort_order": 5},
            headers=admin_headers
        ).json()
        assert updated["sort_order"] == 5
        assert updated["name"] == "New Releases"

        assert client.delete(f"/api/admin/categories/{category['id']}", headers=admin_headers).json() == {"ok": True}
        assert client.get("/api/categories").json() == []

    def test_rename_to_blank_is_400(self, client, admin_headers):
        category = client.post("/api/admin/categories", json={"name": "Comedy"}, headers=admin_headers).json()

        response = client.put(
            f"/api/admin/categories/{category['id']}",
            json={"name": "   "},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert client.get("/api/categories").json()[0]["name"] == "Comedy"

    def test_duplicate_name_is_400(self, client, admin_headers):
        client.post("/api/admin/categories", json={"name": "Drama"}, headers=admin_headers)
        response = client.post("/api/admin/categories", json={"name": "Drama"}, headers=admin_headers)

        assert response.status_code == 400

    def test_deleting_category_keeps_shows(self, client, admin_headers, sample_catalog, db):
        client.delete(f"/api/admin/categories/{sample_catalog['category_id']}", headers=admin_headers)

        show = db.get(Show, sample_catalog["harbor_id"])
        assert show is not None
        assert show.category_id is None


class TestShows:

    def test_create_show_with_poster(self, client, admin_headers, upload_root):
        response = client.post(
            "/api/admin/shows",
            data={"title": "Night Shift", "genres": "Thriller", "year": "2024", "is_featured": "true"},
            files={"poster": JPEG},
            headers=admin_headers
        )

        assert response.status_code == 201
        show = response.json()
        assert show["is_featured"] is True
        assert show["poster"].startswith("/uploads/images/")
        assert show["poster"].endswith(".jpg")
        assert show["banner"] is None
        assert _disk_path(upload_root, show["poster"]).read_bytes() == JPEG[1]

        # uploaded files are served statically
        assert client.get(show["poster"]).content == JPEG[1]

    def test_create_show_requires_title(self, client, admin_headers):
        response = client.post("/api/admin/shows", data={"genres": "Drama"}, headers=admin_headers)

        assert response.status_code == 400

    def test_create_show_unknown_category(self, client, admin_headers):
        response = client.post("/api/admin/shows", data={"title": "X", "category_id": "999"}, headers=admin_headers)

        assert response.status_code == 400

    def test_replacing_poster_removes_old_file(self, client, admin_headers, upload_root):
        show = client.post(
            "/api/admin/shows", data={"title": "Night Shift"}, files={"poster": JPEG}, headers=admin_headers
        ).json()
        old_file = _disk_path(upload_root, show["poster"])

        updated = client.put(
            f"/api/admin/shows/{show['id']}",
            data={"description": "Updated"},
            files={"poster": ("new.png", b"png-bytes", "image/png")},
            headers=admin_headers
        ).json()

        assert updated["description"] == "Updated"
        assert updated["title"] == "Night Shift"
        assert updated["poster"].endswith(".png")
        assert not old_file.exists()
        assert _disk_path(upload_root, updated["poster"]).exists()

    def test_update_missing_show_is_404(self, client, admin_headers):
        assert client.put("/api/admin/shows/999", data={"title": "X"}, headers=admin_headers).status_code == 404

    def test_delete_show_cascades_to_episodes_and_history(self, client, admin_headers, user_headers, sample_catalog, db):
        harbor = sample_catalog["harbor_id"]
        undertow = sample_catalog["episode_ids"][0]
        client.post("/api/history/update", json={"episode_id": undertow, "progress": 10}, headers=user_headers)

        response = client.delete(f"/api/admin/shows/{harbor}", headers=admin_headers)

        assert response.status_code == 200
        assert db.query(Episode).filter(Episode.show_id == harbor).count() == 0
        assert db.query(WatchHistory).filter(WatchHistory.episode_id == undertow).count() == 0
        assert db.query(Episode).count() == 1
        assert client.get(f"/api/shows/{harbor}").status_code == 404
        # the slide pointing at the show survives, unlinked
        assert client.get("/api/slides").json()[0]["show_id"] is None


class TestEpisodes:

    def test_create_episode_with_thumbnail(self, client, admin_headers, sample_catalog, upload_root):
        response = client.post(
            "/api/admin/episodes",
            data={
                "show_id": str(sample_catalog["orbit_id"]),
                "ep_number": "2",
                "title": "Drift",
                "video_url": "https://drive.example.com/file/drift",
                "duration": "1500",
            },
            files={"thumbnail": ("thumb.webp", b"webp", "image/webp")},
            headers=admin_headers
        )

        assert response.status_code == 201
        episode = response.json()
        assert episode["season"] == 1
        assert episode["duration"] == 1500
        assert episode["thumbnail"].startswith("/uploads/images/")
        assert _disk_path(upload_root, episode["thumbnail"]).exists()

    def test_create_episode_for_missing_show_is_404(self, client, admin_headers):
        response = client.post(
            "/api/admin/episodes",
            data={"show_id": "999", "ep_number": "1", "title": "Ghost"},
            headers=admin_headers
        )

        assert response.status_code == 404

    def test_update_and_delete_episode(self, client, admin_headers, sample_catalog):
        launch = sample_catalog["episode_ids"][2]

        updated = client.put(f"/api/admin/episodes/{launch}", data={"title": "Liftoff"}, headers=admin_headers).json()
        assert updated["title"] == "Liftoff"
        assert updated["ep_number"] == 1

        assert client.delete(f"/api/admin/episodes/{launch}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/episodes/{launch}").status_code == 404


class TestSlidesAndUploads:

    def test_slide_image_goes_to_slides_dir(self, client, admin_headers, sample_catalog, upload_root):
        response = client.post(
            "/api/admin/slides",
            data={"title": "Season finale", "show_id": str(sample_catalog["orbit_id"]), "sort_order": "0"},
            files={"hero_image": ("hero.png", b"hero", "image/png")},
            headers=admin_headers
        )

        assert response.status_code == 201
        slide = response.json()
        assert slide["image"].startswith("/uploads/slides/")
        assert _disk_path(upload_root, slide["image"]).exists()
        assert client.get("/api/slides").json()[0]["title"] == "Season finale"

    def test_admin_slide_list_includes_inactive(self, client, admin_headers, sample_catalog):
        slides = client.get("/api/admin/slides", headers=admin_headers).json()

        assert len(slides) == 2

    def test_deactivate_and_delete_slide(self, client, admin_headers, sample_catalog):
        slide_id = client.get("/api/slides").json()[0]["id"]

        client.put(f"/api/admin/slides/{slide_id}", data={"is_active": "false"}, headers=admin_headers)
        assert client.get("/api/slides").json() == []

        assert client.delete(f"/api/admin/slides/{slide_id}", headers=admin_headers).status_code == 200
        assert len(client.get("/api/admin/slides", headers=admin_headers).json()) == 1

    def test_generic_upload_maps_fields_to_directories(self, client, admin_headers):
        response = client.post(
            "/api/admin/upload",
            files={
                "banner": ("b.jpg", b"banner", "image/jpeg"),
                "hero_image": ("h.jpg", b"hero", "image/jpeg"),
                "attachment": ("notes.TXT", b"notes", "text/plain"),
            },
            headers=admin_headers
        )

        assert response.status_code == 200
        files = response.json()["files"]
        assert files["banner"].startswith("/uploads/images/")
        assert files["hero_image"].startswith("/uploads/slides/")
        assert files["attachment"].startswith("/uploads/other/")
        assert files["attachment"].endswith(".txt")

    def test_generic_upload_repeated_field_is_400(self, client, admin_headers, upload_root):
        images_dir = upload_root / "images"
        before = set(images_dir.iterdir()) if images_dir.exists() else set()

        response = client.post(
            "/api/admin/upload",
            files=[
                ("poster", ("one.jpg", b"first", "image/jpeg")),
                ("poster", ("two.jpg", b"second", "image/jpeg")),
            ],
            headers=admin_headers
        )

        assert response.status_code == 400
        assert "poster" in response.json()["detail"]
        after = set(images_dir.iterdir()) if images_dir.exists() else set()
        assert after == before

    def test_generic_upload_without_files_is_400(self, client, admin_headers):
        response = client.post("/api/admin/upload", data={"note": "nothing"}, headers=admin_headers)

        assert response.status_code == 400

    def test_upload_requires_admin(self, client, user_headers):
        response = client.post("/api/admin/upload", files={"poster": JPEG}, headers=user_headers)

        assert response.status_code == 401
