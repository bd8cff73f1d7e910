# =============================================================================
# core/models/contact.py - Contact Submission Schemas
# =============================================================================
# - ContactFormData: what the public contact form posts
# - ContactSubmission: a stored message with a status
# - ContactStatus: new -> read -> replied -> archived
#
# Submissions are never content-edited after creation; only their status
# changes, or they are deleted.
# =============================================================================

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ContactStatus(str, Enum):
    """
    Inbox state of a contact submission.

    - new: not opened yet (default)
    - read: opened in the admin panel
    - replied: the owner answered
    - archived: hidden from the default inbox view
    """
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class ContactFormData(BaseModel):
    """
    Public contact form payload.

    Example:
        {"name": "Jane Smith", "email": "jane@example.com", "message": "Hi!"}
    """

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=320)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("name", "message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        value = value.strip()
        if not _EMAIL_PATTERN.match(value):
            raise ValueError("must be a valid email address")
        return value


class ContactSubmission(BaseModel):
    """
    A stored contact message.

    Local drafts use camelCase (`createdAt`); the Supabase
    "contact_submissions" table uses snake_case (`created_at`).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    status: ContactStatus = ContactStatus.NEW
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return value or ContactStatus.NEW

    def to_row(self) -> dict[str, Any]:
        """Serialize for the contact_submissions table (snake_case, no id)."""
        return self.model_dump(mode="json", exclude={"id"})

    def to_draft(self) -> dict[str, Any]:
        """Serialize for the local draft blob (camelCase)."""
        return self.model_dump(mode="json", by_alias=True)
