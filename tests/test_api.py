"""Route-level tests through FastAPI's TestClient with SQLite and a temp upload dir."""

import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.main import app
from app.models import Base

PREFIX = "/api/v1"


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        session_factory = sessionmaker(bind=engine, autoflush=False)
        self.upload_dir = tempfile.mkdtemp()
        settings = Settings(
            DATABASE_URL="sqlite://",
            JWT_SECRET=SecretStr("access-secret-for-tests"),
            JWT_REFRESH_SECRET=SecretStr("refresh-secret-for-tests"),
            UPLOAD_DIR=self.upload_dir,
        )

        def override_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_db
        app.dependency_overrides[get_settings] = lambda: settings
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    def register(self, email: str, password: str, **extra: object) -> dict:
        response = self.client.post(
            f"{PREFIX}/auth/register", json={"email": email, "password": password, **extra}
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class TestAuthRoutes(ApiTestCase):
    def test_register_login_profile(self) -> None:
        registered = self.register("a@x.com", "secret1", name="Alice")
        self.assertEqual(registered["user"]["role"], "CLIENT")
        self.assertNotIn("password_hash", registered["user"])
        self.assertNotIn("refresh_token_hash", registered["user"])

        login = self.client.post(f"{PREFIX}/auth/login", json={"email": "a@x.com", "password": "secret1"})
        self.assertEqual(login.status_code, 200)
        profile = self.client.get(f"{PREFIX}/auth/profile", headers=self.bearer(login.json()["access_token"]))
        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["name"], "Alice")

    def test_register_validation_is_bad_request(self) -> None:
        response = self.client.post(f"{PREFIX}/auth/register", json={"email": "a@x.com", "password": "123"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "password")

    def test_duplicate_email_conflict(self) -> None:
        self.register("a@x.com", "secret1")
        response = self.client.post(f"{PREFIX}/auth/register", json={"email": "a@x.com", "password": "secret1"})
        self.assertEqual(response.status_code, 409)

    def test_bad_credentials_unauthorized(self) -> None:
        self.register("a@x.com", "secret1")
        response = self.client.post(f"{PREFIX}/auth/login", json={"email": "a@x.com", "password": "wrong1"})
        self.assertEqual(response.status_code, 401)

    def test_missing_and_invalid_bearer(self) -> None:
        missing = self.client.get(f"{PREFIX}/auth/profile")
        self.assertEqual(missing.status_code, 401)
        self.assertEqual(missing.headers["www-authenticate"], "Bearer")
        invalid = self.client.get(f"{PREFIX}/auth/profile", headers=self.bearer("nope"))
        self.assertEqual(invalid.status_code, 401)

    def test_refresh_then_logout_revokes(self) -> None:
        registered = self.register("a@x.com", "secret1")
        refreshed = self.client.post(
            f"{PREFIX}/auth/refresh", json={"refresh_token": registered["refresh_token"]}
        )
        self.assertEqual(refreshed.status_code, 200)
        tokens = refreshed.json()
        logout = self.client.post(f"{PREFIX}/auth/logout", headers=self.bearer(tokens["access_token"]))
        self.assertEqual(logout.status_code, 200)
        again = self.client.post(f"{PREFIX}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        self.assertEqual(again.status_code, 401)

    def test_admin_only_probe(self) -> None:
        client = self.register("a@x.com", "secret1")
        admin = self.register("root@x.com", "admin123", role="ADMIN")
        denied = self.client.get(f"{PREFIX}/auth/admin-only", headers=self.bearer(client["access_token"]))
        self.assertEqual(denied.status_code, 403)
        allowed = self.client.get(f"{PREFIX}/auth/admin-only", headers=self.bearer(admin["access_token"]))
        self.assertEqual(allowed.status_code, 200)
        self.assertEqual(allowed.json()["user"]["role"], "ADMIN")


class TestPostRoutes(ApiTestCase):
    def test_delete_scenario(self) -> None:
        a = self.register("a@x.com", "secret1")
        b = self.register("b@x.com", "secret2")
        admin = self.register("root@x.com", "admin123", role="ADMIN")

        created = self.client.post(
            f"{PREFIX}/posts",
            json={"title": "Olá, Mundo!", "content": "Primeiro post do blog."},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(created.status_code, 201, created.text)
        post = created.json()
        self.assertEqual(post["slug"], "ola-mundo")

        denied = self.client.delete(f"{PREFIX}/posts/{post['id']}", headers=self.bearer(b["access_token"]))
        self.assertEqual(denied.status_code, 403)
        deleted = self.client.delete(f"{PREFIX}/posts/{post['id']}", headers=self.bearer(admin["access_token"]))
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(self.client.get(f"{PREFIX}/posts/{post['id']}").status_code, 404)

    def test_missing_post_is_404_for_non_owner(self) -> None:
        b = self.register("b@x.com", "secret2")
        response = self.client.delete(f"{PREFIX}/posts/12345", headers=self.bearer(b["access_token"]))
        self.assertEqual(response.status_code, 404)

    def test_create_requires_token(self) -> None:
        response = self.client.post(f"{PREFIX}/posts", json={"title": "Title", "content": "Long content here."})
        self.assertEqual(response.status_code, 401)

    def test_list_and_comments(self) -> None:
        a = self.register("a@x.com", "secret1")
        post = self.client.post(
            f"{PREFIX}/posts",
            json={"title": "Listed", "content": "Listed post content.", "published": True},
            headers=self.bearer(a["access_token"]),
        ).json()
        listing = self.client.get(f"{PREFIX}/posts", params={"published": "true", "limit": 5})
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(listing.json()["meta"]["total"], 1)

        comment = self.client.post(
            f"{PREFIX}/posts/{post['id']}/comments",
            json={"content": "Nice"},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(comment.status_code, 201)
        edited = self.client.patch(
            f"{PREFIX}/posts/{post['id']}/comments/{comment.json()['id']}",
            json={"content": "Nice!"},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(edited.json()["content"], "Nice!")
        self.assertEqual(len(self.client.get(f"{PREFIX}/posts/{post['id']}/comments").json()), 1)

    def test_cover_upload(self) -> None:
        a = self.register("a@x.com", "secret1")
        post = self.client.post(
            f"{PREFIX}/posts",
            json={"title": "With cover", "content": "A post with a cover."},
            headers=self.bearer(a["access_token"]),
        ).json()
        response = self.client.post(
            f"{PREFIX}/posts/{post['id']}/cover",
            files={"file": ("cover.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertTrue(response.json()["cover_image"].startswith("/uploads/covers/"))
        bad = self.client.post(
            f"{PREFIX}/posts/{post['id']}/cover",
            files={"file": ("cover.gif", b"GIF89a", "image/gif")},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(bad.status_code, 400)

    def test_other_user_cannot_claim_and_delete_a_cover(self) -> None:
        a = self.register("a@x.com", "secret1")
        b = self.register("b@x.com", "secret2")
        victim = self.client.post(
            f"{PREFIX}/posts",
            json={"title": "Victim post", "content": "A post with a cover."},
            headers=self.bearer(a["access_token"]),
        ).json()
        cover = self.client.post(
            f"{PREFIX}/posts/{victim['id']}/cover",
            files={"file": ("cover.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            headers=self.bearer(a["access_token"]),
        ).json()["cover_image"]
        stored = Path(self.upload_dir) / cover[len("/uploads/") :]

        own = self.client.post(
            f"{PREFIX}/posts",
            json={"title": "Borrowed", "content": "Pointing at a cover.", "cover_image": cover},
            headers=self.bearer(b["access_token"]),
        ).json()
        self.assertIsNone(own["cover_image"])
        self.client.put(
            f"{PREFIX}/posts/{own['id']}",
            json={"cover_image": cover},
            headers=self.bearer(b["access_token"]),
        )
        self.client.delete(f"{PREFIX}/posts/{own['id']}/cover", headers=self.bearer(b["access_token"]))
        self.client.delete(f"{PREFIX}/posts/{own['id']}", headers=self.bearer(b["access_token"]))

        self.assertTrue(stored.exists())
        self.assertEqual(self.client.get(f"{PREFIX}/posts/{victim['id']}").json()["cover_image"], cover)

    def test_unknown_category_is_not_found(self) -> None:
        a = self.register("a@x.com", "secret1")
        response = self.client.post(
            f"{PREFIX}/posts",
            json={"title": "Orphan", "content": "Category does not exist.", "category_id": 999},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"], "Category not found")


class TestCategoryAndAvatarRoutes(ApiTestCase):
    def test_categories_admin_only_with_conflict(self) -> None:
        client = self.register("a@x.com", "secret1")
        admin = self.register("root@x.com", "admin123", role="ADMIN")
        body = {"name": "Tecnologia", "description": "Tech"}
        denied = self.client.post(f"{PREFIX}/categories", json=body, headers=self.bearer(client["access_token"]))
        self.assertEqual(denied.status_code, 403)
        created = self.client.post(f"{PREFIX}/categories", json=body, headers=self.bearer(admin["access_token"]))
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["slug"], "tecnologia")
        duplicate = self.client.post(f"{PREFIX}/categories", json=body, headers=self.bearer(admin["access_token"]))
        self.assertEqual(duplicate.status_code, 409)
        self.assertEqual(len(self.client.get(f"{PREFIX}/categories").json()), 1)

    def test_avatar_upload_and_admin_delete(self) -> None:
        a = self.register("a@x.com", "secret1")
        b = self.register("b@x.com", "secret2")
        admin = self.register("root@x.com", "admin123", role="ADMIN")
        uploaded = self.client.post(
            f"{PREFIX}/users/me/avatar",
            files={"file": ("me.jpg", b"\xff\xd8\xff", "image/jpeg")},
            headers=self.bearer(a["access_token"]),
        )
        self.assertEqual(uploaded.status_code, 200, uploaded.text)
        user_id = a["user"]["id"]
        denied = self.client.delete(f"{PREFIX}/users/{user_id}/avatar", headers=self.bearer(b["access_token"]))
        self.assertEqual(denied.status_code, 403)
        allowed = self.client.delete(f"{PREFIX}/users/{user_id}/avatar", headers=self.bearer(admin["access_token"]))
        self.assertEqual(allowed.status_code, 200)
        profile = self.client.get(f"{PREFIX}/auth/profile", headers=self.bearer(a["access_token"]))
        self.assertIsNone(profile.json()["avatar"])


if __name__ == "__main__":
    unittest.main()
