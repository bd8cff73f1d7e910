# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the project contract:
# - Project: a stored project (Supabase "projects" table or local draft)
# - ProjectFormData: what the admin form submits
# - ProjectImage / Technology: nested gallery and badge entries
#
# Projects are stored with camelCase keys both remotely and in the local
# draft blob, so every model here uses camelCase aliases.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lib.utils import slugify, split_tags, tag_color


class DisplayType(str, Enum):
    """How the landing page opens a project: modal popup or its own page."""
    POPUP = "popup"
    PAGE = "page"


class ProjectImage(BaseModel):
    """One gallery image."""
    src: str
    alt: str = ""


class Technology(BaseModel):
    """A technology badge shown on the project card."""
    name: str
    color: str | None = None


class Project(BaseModel):
    """
    A portfolio project.

    `id` is assigned once (by Supabase, or by the local repository) and never
    changes. `slug` is an alternate key used by public project pages.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "E-commerce Website",
            "imageUrl": "https://.../main.png",
            "images": [{"src": "https://.../main.png", "alt": "..."}],
            "slug": "e-commerce-website",
            "year": "2024",
            ...
        }
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    title: str = Field(..., min_length=1)
    description: str = ""
    image_url: str = ""
    tags: list[str] = Field(default_factory=list)
    demo_url: str | None = None
    github_url: str | None = None
    video_url: str | None = None
    project_role: str | None = None
    year: str = ""
    category: str = ""
    images: list[ProjectImage] = Field(default_factory=list)
    technologies: list[Technology] = Field(default_factory=list)
    display_type: DisplayType = DisplayType.POPUP
    slug: str | None = None

    # Free-text rich sections shown on the project page
    technical_details: str | None = None
    project_challenges: str | None = None
    implementation_details: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", "year", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("images", mode="before")
    @classmethod
    def _coerce_images(cls, value: Any) -> Any:
        # Older drafts stored plain URLs
        if isinstance(value, list):
            return [{"src": v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return split_tags(value)
        return value

    @property
    def effective_slug(self) -> str:
        """The stored slug, or one derived from the title."""
        return self.slug or slugify(self.title)

    def to_row(self) -> dict[str, Any]:
        """Serialize for the projects table (camelCase, no id)."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})

    def to_draft(self) -> dict[str, Any]:
        """Serialize for the local draft blob (camelCase, with id)."""
        return self.model_dump(mode="json", by_alias=True)


class ProjectFormData(BaseModel):
    """
    Payload submitted by the admin project form.

    `tags` arrives as the comma-separated text field; `images` as the
    ordered list of uploaded image URLs.

    Example:
        {
            "title": "Foo",
            "tags": "React, Supabase",
            "imageUrl": "https://.../a.png",
            "images": ["https://.../a.png", "https://.../b.png"],
            "year": "2024"
        }
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    tags: str | list[str] = ""
    demo_url: str | None = None
    github_url: str | None = None
    video_url: str | None = None
    project_role: str | None = None
    year: str = ""
    category: str = ""
    image_url: str = ""
    images: list[str] = Field(default_factory=list)
    display_type: DisplayType = DisplayType.POPUP
    slug: str | None = None
    technical_details: str | None = None
    project_challenges: str | None = None
    implementation_details: str | None = None

    def ordered_images(self) -> list[str]:
        """
        Image URLs with the main image first.

        The gallery always opens on the card image, so images[0] must equal
        image_url whenever a main image is set.
        """
        if not self.image_url:
            return list(self.images)
        return [self.image_url] + [src for src in self.images if src != self.image_url]

    def to_project_fields(self) -> dict[str, Any]:
        """
        Build the stored project fields (python names, no id/timestamps).

        Derives slug, image alt texts and technology badges from the form.
        """
        tags = split_tags(self.tags)
        images = [
            ProjectImage(src=src, alt=f"{self.title} image {index + 1}")
            for index, src in enumerate(self.ordered_images())
        ]

        return {
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "tags": tags,
            "demo_url": self.demo_url or None,
            "github_url": self.github_url or None,
            "video_url": self.video_url or None,
            "project_role": self.project_role or None,
            "year": self.year,
            "category": self.category,
            "images": images,
            "technologies": [Technology(name=tag, color=tag_color(tag)) for tag in tags],
            "display_type": self.display_type,
            "slug": self.slug or slugify(self.title),
            "technical_details": self.technical_details,
            "project_challenges": self.project_challenges,
            "implementation_details": self.implementation_details,
        }
