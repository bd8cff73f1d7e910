# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Installs an in-memory Supabase double in place of the real client
# - Provides draft stores in temporary directories
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-admin-tokens")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from lib.local_store import LocalDraftStore
from lib.supabase_client import SupabaseClient
from tests.fakes import FakeClock, FakeSupabase


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase(monkeypatch):
    """In-memory Supabase client installed as the singleton."""
    fake = FakeSupabase(os.environ["SUPABASE_URL"])
    monkeypatch.setattr(SupabaseClient, "_instance", fake)
    return fake


@pytest.fixture
def draft_store(tmp_path):
    """Empty local draft store in a temporary directory."""
    return LocalDraftStore(tmp_path / "drafts")


@pytest.fixture
def clock():
    """Deterministic clock starting at 2024-01-15T10:00:00Z."""
    return FakeClock()


@pytest.fixture
def sample_project_draft():
    """A project as stored in the local draft blob."""
    return {
        "id": "project-1",
        "title": "E-commerce Website",
        "description": "A modern e-commerce platform.",
        "imageUrl": "https://images.example.com/shop.png",
        "tags": ["React", "Node.js"],
        "demoUrl": "https://example.com/shop",
        "year": "2023",
        "category": "Web Development",
        "images": [{"src": "https://images.example.com/shop.png", "alt": "Homepage"}],
        "technologies": [{"name": "React", "color": "bg-blue-100 text-blue-800"}],
        "displayType": "popup",
        "createdAt": "2024-01-10T09:00:00+00:00",
    }


@pytest.fixture
def sample_submission_draft():
    """A contact submission as stored in the local draft blob."""
    return {
        "id": "submission-1",
        "name": "Jane Smith",
        "email": "jane@example.com",
        "message": "I'd like to discuss a project.",
        "status": "new",
        "createdAt": "2024-01-14T08:30:00+00:00",
    }


@pytest.fixture
def sample_settings_draft():
    """Site settings as stored in the local draft blob (camelCase)."""
    return {
        "title": "Ada's Portfolio",
        "ownerName": "Ada Lovelace",
        "email": "ada@example.com",
        "about": "Analytical engines and more.",
        "heroTitle": "Engineer",
        "heroDescription": "Building things.",
        "heroImageUrl": "https://images.example.com/hero.png",
        "socialLinks": [{"name": "GitHub", "url": "https://github.com/ada", "icon": "Github"}],
    }
