# =============================================================================
# tests/test_routers.py - HTTP API Tests
# =============================================================================
# This module contains tests for the /api/v1 routes:
# - Public site settings, projects and contact form
# - Admin project editing and the contact inbox
# - Media upload/list/delete and bucket initialization
# - The migration endpoint
#
# Admin auth is overridden with a fixed user and content comes from a
# local draft repository in a temporary directory.
# =============================================================================

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, require_admin
from app.dependencies import get_content_repository, get_sync_service
from app.main import app
from lib.local_store import PROJECTS_KEY
from core.services.local_repository import LocalContentRepository
from core.services.sync_service import SyncService

ADMIN = AuthUser(id=uuid4(), email="owner@example.com")


@pytest.fixture
def repository(draft_store, clock):
    return LocalContentRepository(draft_store, clock=clock)


@pytest.fixture
def client(repository):
    """API client acting as a signed-in admin."""
    app.dependency_overrides[get_content_repository] = lambda: repository
    app.dependency_overrides[require_admin] = lambda: ADMIN
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(repository):
    """API client with no credentials."""
    app.dependency_overrides[get_content_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_with_supabase(self, client, fake_supabase):
        client.post("/api/v1/media/buckets/initialize")

        response = client.get("/api/v1/health/ready")

        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["database"] == "healthy"
        assert data["checks"]["storage"] == "healthy"
        assert data["checks"]["tables"] == {
            "projects": True,
            "contact_submissions": True,
            "site_settings": True,
        }

    def test_degraded_without_buckets_or_tables(self, client, fake_supabase):
        fake_supabase.fail("contact_submissions", "select")

        data = client.get("/api/v1/health/ready").json()

        assert data["status"] == "degraded"
        assert data["checks"]["database"] == "missing tables: contact_submissions"
        assert data["checks"]["storage"].startswith("missing buckets: ")
        assert data["checks"]["buckets"]["portfolio-projects"] is False

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Portfolio API"


# =============================================================================
# Site Settings
# =============================================================================

class TestSiteSettingsRoutes:
    def test_get_is_public(self, anonymous_client):
        response = anonymous_client.get("/api/v1/settings")

        assert response.status_code == 200
        assert response.json()["ownerName"] == "John Doe"

    def test_update(self, client):
        response = client.put("/api/v1/settings", json={"ownerName": "Ada", "heroTitle": "Engineer"})

        assert response.status_code == 200
        assert response.json()["ownerName"] == "Ada"
        assert client.get("/api/v1/settings").json()["heroTitle"] == "Engineer"

    def test_update_requires_auth(self, anonymous_client):
        response = anonymous_client.put("/api/v1/settings", json={"ownerName": "Mallory"})

        assert response.status_code in (401, 403)


# =============================================================================
# Projects
# =============================================================================

class TestProjectRoutes:
    """Test /api/v1/projects."""

    def test_list_is_public_and_camel_case(self, anonymous_client):
        response = anonymous_client.get("/api/v1/projects")

        assert response.status_code == 200
        projects = response.json()
        assert len(projects) == 2
        assert "imageUrl" in projects[0]

    def test_get_by_slug(self, anonymous_client):
        response = anonymous_client.get("/api/v1/projects/ecommerce-website")

        assert response.status_code == 200
        assert response.json()["title"] == "E-commerce Website"

    def test_unknown_slug_is_404(self, anonymous_client):
        response = anonymous_client.get("/api/v1/projects/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "PROJECT_NOT_FOUND"

    def test_create(self, client):
        response = client.post("/api/v1/projects", json={
            "title": "Foo",
            "tags": "React, Supabase",
            "year": "2024",
            "imageUrl": "https://img/a.png",
            "images": ["https://img/b.png", "https://img/a.png"],
        })

        assert response.status_code == 201
        project = response.json()
        assert project["slug"] == "foo"
        assert project["images"][0]["src"] == "https://img/a.png"
        assert client.get("/api/v1/projects/foo").status_code == 200

    def test_create_rejects_empty_title(self, client):
        response = client.post("/api/v1/projects", json={"title": ""})

        assert response.status_code == 422
        assert response.json()["code"] == "REQUEST_VALIDATION_ERROR"

    def test_create_requires_auth(self, anonymous_client):
        response = anonymous_client.post("/api/v1/projects", json={"title": "Foo"})

        assert response.status_code in (401, 403)

    def test_update(self, client):
        response = client.put("/api/v1/projects/project-1", json={"title": "Shop", "year": "2025"})

        assert response.status_code == 200
        assert response.json()["id"] == "project-1"
        assert response.json()["year"] == "2025"

    def test_update_missing_is_404(self, client):
        response = client.put("/api/v1/projects/missing", json={"title": "Shop"})

        assert response.status_code == 404

    def test_delete(self, client):
        response = client.delete("/api/v1/projects/project-1")

        assert response.json() == {"id": "project-1", "deleted": True}
        assert len(client.get("/api/v1/projects").json()) == 1


# =============================================================================
# Contact
# =============================================================================

class TestContactRoutes:
    """Test /api/v1/contact."""

    def test_submit_is_public(self, anonymous_client):
        response = anonymous_client.post("/api/v1/contact", json={
            "name": "Grace",
            "email": "grace@example.com",
            "message": "Let's talk.",
        })

        assert response.status_code == 201
        assert response.json()["status"] == "new"
        assert response.json()["createdAt"]

    def test_submit_rejects_bad_email(self, anonymous_client):
        response = anonymous_client.post("/api/v1/contact", json={
            "name": "Grace",
            "email": "grace",
            "message": "Let's talk.",
        })

        assert response.status_code == 422

    def test_inbox_requires_auth(self, anonymous_client):
        response = anonymous_client.get("/api/v1/contact/submissions")

        assert response.status_code in (401, 403)

    def test_status_filter(self, client):
        response = client.get("/api/v1/contact/submissions", params={"status": "new"})

        assert [s["id"] for s in response.json()] == ["submission-1"]

    def test_mark_read(self, client):
        response = client.patch("/api/v1/contact/submissions/submission-1", json={"status": "read"})

        assert response.status_code == 200
        assert response.json()["status"] == "read"
        assert client.get("/api/v1/contact/submissions", params={"status": "new"}).json() == []

    def test_invalid_status_is_422(self, client):
        response = client.patch("/api/v1/contact/submissions/submission-1", json={"status": "spam"})

        assert response.status_code == 422

    def test_unknown_submission_is_404(self, client):
        response = client.patch("/api/v1/contact/submissions/missing", json={"status": "read"})

        assert response.status_code == 404
        assert response.json()["code"] == "SUBMISSION_NOT_FOUND"

    def test_delete(self, client):
        response = client.delete("/api/v1/contact/submissions/submission-2")

        assert response.json()["deleted"] is True
        assert len(client.get("/api/v1/contact/submissions").json()) == 1


# =============================================================================
# Media
# =============================================================================

class TestMediaRoutes:
    """Test /api/v1/media against the in-memory storage double."""

    def test_upload(self, client, fake_supabase):
        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("cover.png", b"\x89PNG-data", "image/png")},
            data={"bucket": "portfolio-projects", "path": "covers"},
        )

        assert response.status_code == 201
        data = response.json()
        assert "/storage/v1/object/public/portfolio-projects/covers/" in data["url"]
        assert data["size"] == 9

    def test_upload_wrong_type_is_415_without_storage_calls(self, client, fake_supabase):
        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 415
        assert response.json()["code"] == "INVALID_FILE_TYPE"
        assert fake_supabase.storage.total_calls == 0

    def test_upload_storage_failure_is_502(self, client, fake_supabase):
        fake_supabase.storage.failing.add("upload")

        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("cover.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 502
        assert response.json()["code"] == "STORAGE_ERROR"

    def test_list_and_delete(self, client, fake_supabase):
        client.post(
            "/api/v1/media/upload",
            files={"file": ("cover.png", b"\x89PNG", "image/png")},
            data={"bucket": "portfolio", "path": "covers"},
        )
        assets = client.get("/api/v1/media/portfolio", params={"path": "covers"}).json()
        assert len(assets) == 1

        response = client.delete(f"/api/v1/media/portfolio/{assets[0]['path']}")

        assert response.status_code == 200
        assert client.get("/api/v1/media/portfolio", params={"path": "covers"}).json() == []

    def test_list_fresh_bucket(self, client, fake_supabase):
        assert client.get("/api/v1/media/portfolio-profile").json() == []

    def test_initialize_buckets(self, client, fake_supabase):
        response = client.post("/api/v1/media/buckets/initialize")

        assert response.json()["ready"] is True
        assert len(fake_supabase.storage.buckets) == 3

        names = [b["name"] for b in client.get("/api/v1/media/buckets").json()]
        assert names == ["portfolio", "portfolio-profile", "portfolio-projects"]


# =============================================================================
# Migration
# =============================================================================

class TestMigrationRoute:
    def test_migrate(self, client, fake_supabase, draft_store, clock):
        app.dependency_overrides[get_sync_service] = lambda: SyncService(draft_store, clock=clock)
        draft_store.set(PROJECTS_KEY, [{"title": "Foo", "year": "2024"}])

        response = client.post("/api/v1/admin/migrate")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["projects_inserted"] == 1
        assert data["settings"] == "ok"
        assert data["submissions_inserted"] == 2

    def test_migrate_requires_auth(self, anonymous_client):
        response = anonymous_client.post("/api/v1/admin/migrate")

        assert response.status_code in (401, 403)
