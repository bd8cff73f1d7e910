# =============================================================================
# core/models/site_settings.py - Site Settings Schemas
# =============================================================================
# The site settings record is a singleton: owner/contact details, hero copy
# and social links shown on the landing page.
#
# Local drafts store it with camelCase keys; the Supabase "site_settings"
# table uses snake_case columns. The model accepts both.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SocialLink(BaseModel):
    """A social profile link; `icon` names the icon the UI renders."""
    name: str
    url: str
    icon: str = ""


class SiteSettings(BaseModel):
    """
    Singleton site settings record.

    Example:
        {
            "title": "My Creative Portfolio",
            "ownerName": "John Doe",
            "email": "contact@example.com",
            "heroTitle": "Product Designer & Developer",
            "socialLinks": [{"name": "GitHub", "url": "https://github.com", "icon": "Github"}]
        }
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    title: str = ""
    owner_name: str = ""
    email: str = ""
    phone: str | None = None
    location: str | None = None
    about: str = ""
    hero_title: str = ""
    hero_description: str = ""
    hero_image_url: str = ""
    social_links: list[SocialLink] = Field(default_factory=list)
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("social_links", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return value or []

    def to_row(self) -> dict[str, Any]:
        """Serialize for the site_settings table (snake_case, no id)."""
        row = self.model_dump(mode="json", exclude={"id"})
        row["phone"] = self.phone or None
        row["location"] = self.location or None
        return row

    def to_draft(self) -> dict[str, Any]:
        """Serialize for the local draft blob (camelCase)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def default_site_settings() -> SiteSettings:
    """Settings shown before the owner has saved anything."""
    return SiteSettings(
        title="My Creative Portfolio",
        owner_name="John Doe",
        email="contact@example.com",
        phone="+1 (555) 123-4567",
        location="San Francisco, CA",
        about="I'm a creative professional with expertise in web development and design.",
        hero_title="Product Designer & Developer",
        hero_description=(
            "Creating beautiful digital experiences with a focus on usability and performance."
        ),
        hero_image_url="https://images.unsplash.com/photo-1579546929518-9e396f3cc809?q=80&w=2070",
        social_links=[
            SocialLink(name="GitHub", url="https://github.com", icon="Github"),
            SocialLink(name="Twitter", url="https://twitter.com", icon="Twitter"),
            SocialLink(name="LinkedIn", url="https://linkedin.com", icon="Linkedin"),
            SocialLink(name="Instagram", url="https://instagram.com", icon="Instagram"),
        ],
    )
