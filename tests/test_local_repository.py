# =============================================================================
# tests/test_local_repository.py - Local Draft Repository Tests
# =============================================================================
# This module contains tests for:
# - Sample content seeding
# - Project and submission CRUD persisted to the draft blobs
# - Ordering and status filtering
# =============================================================================

import os

from lib.local_store import (
    CONTACT_SUBMISSIONS_KEY,
    PROJECTS_KEY,
    SITE_SETTINGS_KEY,
    LocalDraftStore,
)
from core.models.contact import ContactFormData, ContactStatus
from core.models.project import ProjectFormData
from core.models.site_settings import SiteSettings
from core.services.local_repository import LOCAL_SETTINGS_ID, LocalContentRepository


def contact_form(email: str = "jane@example.com") -> ContactFormData:
    return ContactFormData(name="Jane Smith", email=email, message="Hello there")


# =============================================================================
# Seeding
# =============================================================================

class TestSeeding:
    """Test sample content on first use."""

    def test_seeds_missing_blobs(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.get_site_settings().owner_name == "John Doe"
        assert len(repository.list_projects()) == 2
        assert len(repository.list_submissions()) == 2
        assert draft_store.has(PROJECTS_KEY)

    def test_existing_blobs_are_not_overwritten(self, draft_store, clock):
        draft_store.set(PROJECTS_KEY, [])

        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.list_projects() == []
        assert len(repository.list_submissions()) == 2

    def test_seeding_can_be_disabled(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock, seed_samples=False)

        assert repository.list_projects() == []
        assert repository.list_submissions() == []
        assert not draft_store.has(SITE_SETTINGS_KEY)


# =============================================================================
# Site Settings
# =============================================================================

class TestLocalSiteSettings:
    def test_update_assigns_local_id(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock, seed_samples=False)

        saved = repository.update_site_settings(SiteSettings(owner_name="Ada"))

        assert saved.id == LOCAL_SETTINGS_ID
        assert saved.updated_at == clock()
        assert repository.get_site_settings().owner_name == "Ada"
        assert draft_store.get(SITE_SETTINGS_KEY)["ownerName"] == "Ada"

    def test_invalid_draft_falls_back_to_defaults(self, draft_store, clock):
        draft_store.set(SITE_SETTINGS_KEY, {"socialLinks": "not-a-list"})
        repository = LocalContentRepository(draft_store, clock=clock, seed_samples=False)

        assert repository.get_site_settings().owner_name == "John Doe"


# =============================================================================
# Projects
# =============================================================================

class TestLocalProjects:
    """Test project CRUD on the projects blob."""

    def test_create_persists_to_disk(self, tmp_path, clock):
        directory = tmp_path / "drafts"
        repository = LocalContentRepository(LocalDraftStore(directory), clock=clock, seed_samples=False)

        created = repository.create_project(ProjectFormData(title="Foo Bar", tags="React"))

        reopened = LocalContentRepository(LocalDraftStore(directory), clock=clock, seed_samples=False)
        project = reopened.get_project(created.id)
        assert project.title == "Foo Bar"
        assert project.slug == "foo-bar"
        assert project.id.startswith("project-")
        assert project.created_at == clock()

    def test_list_newest_first(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock, seed_samples=False)
        repository.create_project(ProjectFormData(title="Older"))
        clock.advance(60)
        repository.create_project(ProjectFormData(title="Newer"))

        assert [p.title for p in repository.list_projects()] == ["Newer", "Older"]

    def test_undated_projects_sort_last(self, draft_store, clock):
        draft_store.set(PROJECTS_KEY, [
            {"id": "a", "title": "Undated"},
            {"id": "b", "title": "Dated", "createdAt": "2024-01-01T00:00:00"},
        ])
        repository = LocalContentRepository(draft_store, clock=clock)

        assert [p.id for p in repository.list_projects()] == ["b", "a"]

    def test_slug_lookup_falls_back_to_title(self, draft_store, clock):
        draft_store.set(PROJECTS_KEY, [{"id": "a", "title": "No Slug Here"}])
        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.get_project_by_slug("no-slug-here").id == "a"

    def test_update_keeps_id_and_created_at(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock, seed_samples=False)
        created = repository.create_project(ProjectFormData(title="Foo", year="2024"))
        later = clock.advance(3600)

        updated = repository.update_project(created.id, ProjectFormData(title="Foo", year="2025"))

        assert updated.id == created.id
        assert updated.year == "2025"
        assert updated.created_at == created.created_at
        assert updated.updated_at == later
        assert len(repository.list_projects()) == 1

    def test_update_missing_returns_none(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock, seed_samples=False)

        assert repository.update_project("missing", ProjectFormData(title="Foo")) is None

    def test_delete(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.delete_project("project-1") is True
        assert repository.get_project("project-1") is None
        assert len(repository.list_projects()) == 1

    def test_failed_save_leaves_projects_unchanged(self, draft_store, clock, monkeypatch):
        repository = LocalContentRepository(draft_store, clock=clock)

        def fail_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "replace", fail_replace)

        assert repository.create_project(ProjectFormData(title="Ghost")) is None
        assert sorted(p.title for p in repository.list_projects()) == [
            "E-commerce Website",
            "Portfolio Website",
        ]
        assert repository.get_project_by_slug("ghost") is None


# =============================================================================
# Contact Submissions
# =============================================================================

class TestLocalSubmissions:
    """Test the contact inbox on the submissions blob."""

    def test_new_submission_is_first(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)
        clock.advance(60)

        submission = repository.create_submission(contact_form("new@example.com"))

        assert submission.status == ContactStatus.NEW
        assert repository.list_submissions()[0].id == submission.id
        assert draft_store.get(CONTACT_SUBMISSIONS_KEY)[0]["email"] == "new@example.com"

    def test_status_filter(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)

        assert [s.id for s in repository.list_submissions(ContactStatus.NEW)] == ["submission-1"]
        assert [s.id for s in repository.list_submissions(ContactStatus.READ)] == ["submission-2"]

    def test_status_change_moves_between_filters(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.update_submission_status("submission-1", ContactStatus.READ) is True

        assert repository.list_submissions(ContactStatus.NEW) == []
        read_ids = {s.id for s in repository.list_submissions(ContactStatus.READ)}
        assert read_ids == {"submission-1", "submission-2"}

    def test_status_change_on_missing_returns_false(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.update_submission_status("missing", ContactStatus.ARCHIVED) is False

    def test_delete(self, draft_store, clock):
        repository = LocalContentRepository(draft_store, clock=clock)

        assert repository.delete_submission("submission-2") is True
        assert repository.get_submission("submission-2") is None
