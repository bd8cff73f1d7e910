# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the content models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Models serialize to the right key style for each store
# - Default values work as expected
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.models import (
    AssetFile,
    ContactFormData,
    ContactStatus,
    ContactSubmission,
    DisplayType,
    MigrationResult,
    Project,
    ProjectFormData,
    SiteSettings,
    SyncStatus,
    default_site_settings,
)


# =============================================================================
# Project Model Tests
# =============================================================================

class TestProject:
    """Tests for Project model."""

    def test_parses_camel_case_draft(self):
        project = Project.model_validate({
            "id": 12,
            "title": "Foo",
            "imageUrl": "https://img/a.png",
            "demoUrl": "https://demo",
            "year": 2024,
            "displayType": "page",
        })

        assert project.id == "12"
        assert project.year == "2024"
        assert project.image_url == "https://img/a.png"
        assert project.display_type == DisplayType.PAGE

    def test_plain_string_images_become_objects(self):
        project = Project(title="Foo", images=["https://img/a.png"])

        assert project.images[0].src == "https://img/a.png"
        assert project.images[0].alt == ""

    def test_string_tags_are_split(self):
        assert Project(title="Foo", tags="React, ,Vue").tags == ["React", "Vue"]

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Project(title="")

    def test_effective_slug(self):
        assert Project(title="My Cool  Project").effective_slug == "my-cool-project"
        assert Project(title="Foo", slug="custom").effective_slug == "custom"

    def test_to_row_is_camel_case_without_id(self):
        row = Project(id="p1", title="Foo", image_url="x").to_row()

        assert "id" not in row
        assert row["imageUrl"] == "x"
        assert row["displayType"] == "popup"

    def test_to_draft_keeps_id(self):
        assert Project(id="p1", title="Foo").to_draft()["id"] == "p1"


class TestProjectFormData:
    """Tests for ProjectFormData model."""

    def test_main_image_is_first(self):
        form = ProjectFormData(
            title="Foo",
            image_url="https://img/b.png",
            images=["https://img/a.png", "https://img/b.png", "https://img/c.png"],
        )

        assert form.ordered_images() == [
            "https://img/b.png",
            "https://img/a.png",
            "https://img/c.png",
        ]

    def test_main_image_added_when_missing_from_gallery(self):
        form = ProjectFormData(title="Foo", image_url="https://img/main.png", images=["https://img/a.png"])

        assert form.ordered_images()[0] == "https://img/main.png"
        assert len(form.ordered_images()) == 2

    def test_no_main_image_keeps_order(self):
        form = ProjectFormData(title="Foo", images=["https://img/a.png", "https://img/b.png"])

        assert form.ordered_images() == ["https://img/a.png", "https://img/b.png"]

    def test_project_fields(self):
        form = ProjectFormData.model_validate({
            "title": "Foo Bar",
            "tags": "React, Mystery",
            "imageUrl": "https://img/a.png",
            "images": ["https://img/a.png"],
            "demoUrl": "",
        })

        fields = form.to_project_fields()

        assert fields["slug"] == "foo-bar"
        assert fields["tags"] == ["React", "Mystery"]
        assert fields["demo_url"] is None
        assert fields["images"][0].alt == "Foo Bar image 1"
        assert fields["technologies"][0].color == "bg-blue-100 text-blue-800"
        assert fields["technologies"][1].color == "bg-gray-100 text-gray-800"

    def test_explicit_slug_wins(self):
        assert ProjectFormData(title="Foo", slug="bar").to_project_fields()["slug"] == "bar"

    def test_title_length_limits(self):
        with pytest.raises(ValidationError):
            ProjectFormData(title="")
        with pytest.raises(ValidationError):
            ProjectFormData(title="x" * 201)


# =============================================================================
# Site Settings Model Tests
# =============================================================================

class TestSiteSettings:
    """Tests for SiteSettings model."""

    def test_accepts_both_key_styles(self):
        camel = SiteSettings.model_validate({"ownerName": "Ada", "heroTitle": "Engineer"})
        snake = SiteSettings.model_validate({"owner_name": "Ada", "hero_title": "Engineer"})

        assert camel == snake

    def test_to_row_is_snake_case(self):
        row = SiteSettings(id="1", owner_name="Ada", phone="").to_row()

        assert "id" not in row
        assert row["owner_name"] == "Ada"
        assert row["phone"] is None

    def test_to_draft_is_camel_case(self):
        draft = SiteSettings(owner_name="Ada").to_draft()

        assert draft["ownerName"] == "Ada"
        assert "phone" not in draft

    def test_defaults(self):
        defaults = default_site_settings()

        assert defaults.title == "My Creative Portfolio"
        assert [link.name for link in defaults.social_links] == ["GitHub", "Twitter", "LinkedIn", "Instagram"]


# =============================================================================
# Contact Model Tests
# =============================================================================

class TestContactModels:
    """Tests for contact form and submission models."""

    def test_form_strips_whitespace(self):
        form = ContactFormData(name="  Jane ", email=" jane@example.com ", message=" Hi ")

        assert form.name == "Jane"
        assert form.email == "jane@example.com"
        assert form.message == "Hi"

    def test_form_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            ContactFormData(name="Jane", email="not-an-email", message="Hi")

    def test_form_rejects_blank_message(self):
        with pytest.raises(ValidationError):
            ContactFormData(name="Jane", email="jane@example.com", message="   ")

    def test_submission_defaults_to_new(self):
        submission = ContactSubmission(name="Jane", email="jane@example.com", message="Hi", status=None)

        assert submission.status == ContactStatus.NEW

    def test_submission_row_and_draft_styles(self):
        submission = ContactSubmission(
            id="s1",
            name="Jane",
            email="jane@example.com",
            message="Hi",
            created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )

        assert "created_at" in submission.to_row()
        assert "id" not in submission.to_row()
        assert "createdAt" in submission.to_draft()

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            ContactSubmission(name="Jane", email="jane@example.com", message="Hi", status="spam")


# =============================================================================
# Asset / Migration Model Tests
# =============================================================================

class TestAssetFile:
    def test_size_and_extension(self):
        file = AssetFile("Photo.JPEG", "image/jpeg", b"12345")

        assert file.size == 5
        assert file.extension == "jpeg"
        assert AssetFile("README", "text/plain", b"").extension == ""


class TestMigrationResult:
    """Tests for MigrationResult model."""

    def test_defaults(self):
        result = MigrationResult()

        assert result.settings == SyncStatus.SKIPPED
        assert result.success is True
        assert result.has_failures is False

    def test_item_failure_is_not_an_abort(self):
        result = MigrationResult(projects_failed=1)

        assert result.success is True
        assert result.has_failures is True

    def test_abort(self):
        result = MigrationResult(settings=SyncStatus.ERROR, aborted=True)

        assert result.success is False
        assert result.has_failures is True

    def test_serializes_computed_fields(self):
        data = MigrationResult().model_dump()

        assert data["success"] is True
        assert data["has_failures"] is False
