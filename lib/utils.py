# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small helpers used across the models and services:
# - slugs and tag parsing for projects
# - UTC timestamps
# - MIME accept-pattern matching for uploads
# =============================================================================

import re
from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# UUID / Time Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        project_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        project_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# Project Helpers
# =============================================================================

_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    """
    Derive a URL slug from a project title.

    Trims the title, lowercases it and replaces each run of whitespace
    with a hyphen; other characters are kept as typed.

    Example:
        slugify("My Cool  Project") -> "my-cool-project"
    """
    return _WHITESPACE.sub("-", title.strip().lower())


def split_tags(tags: str | list[str] | None) -> list[str]:
    """
    Normalize the tag field from the admin form.

    Accepts the comma-separated string the form submits, or an
    already-split list. Blank entries are dropped.
    """
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [t.strip() for t in tags if t and t.strip()]


# Badge colour classes for well-known technologies
TAG_COLORS: dict[str, str] = {
    "react": "bg-blue-100 text-blue-800",
    "vue": "bg-green-100 text-green-800",
    "angular": "bg-red-100 text-red-800",
    "javascript": "bg-yellow-100 text-yellow-800",
    "typescript": "bg-blue-100 text-blue-800",
    "node": "bg-green-100 text-green-800",
    "node.js": "bg-green-100 text-green-800",
    "postgresql": "bg-blue-100 text-blue-800",
    "supabase": "bg-green-100 text-green-800",
    "firebase": "bg-yellow-100 text-yellow-800",
    "tailwind": "bg-cyan-100 text-cyan-800",
    "tailwind css": "bg-cyan-100 text-cyan-800",
    "css": "bg-blue-100 text-blue-800",
    "html": "bg-orange-100 text-orange-800",
    "figma": "bg-purple-100 text-purple-800",
    "python": "bg-blue-100 text-blue-800",
    "django": "bg-green-100 text-green-800",
    "flask": "bg-gray-100 text-gray-800",
    "docker": "bg-blue-100 text-blue-800",
    "aws": "bg-yellow-100 text-yellow-800",
    "graphql": "bg-pink-100 text-pink-800",
    "ui": "bg-pink-100 text-pink-800",
    "ux": "bg-indigo-100 text-indigo-800",
    "design": "bg-purple-100 text-purple-800",
    "mobile": "bg-indigo-100 text-indigo-800",
    "swift": "bg-orange-100 text-orange-800",
    "kotlin": "bg-purple-100 text-purple-800",
    "rust": "bg-orange-100 text-orange-800",
    "go": "bg-blue-100 text-blue-800",
    "threejs": "bg-black text-white",
}

DEFAULT_TAG_COLOR = "bg-gray-100 text-gray-800"


def tag_color(tag: str) -> str:
    """Badge colour class for a tag (case-insensitive), gray if unknown."""
    return TAG_COLORS.get(tag.strip().lower(), DEFAULT_TAG_COLOR)


# =============================================================================
# Upload Helpers
# =============================================================================

def matches_accept_pattern(content_type: str | None, accepted: list[str]) -> bool:
    """
    Check a MIME type against accept patterns.

    Patterns are exact types ("image/png"), wildcard prefixes ("image/*"),
    or "*" for anything. An empty pattern list accepts everything.

    Example:
        matches_accept_pattern("image/png", ["image/*"])  # True
        matches_accept_pattern("text/csv", ["image/png", "image/jpeg"])  # False
    """
    if not accepted:
        return True

    mime = (content_type or "").strip().lower()
    for pattern in accepted:
        pattern = pattern.strip().lower()
        if pattern in ("*", "*/*"):
            return True
        if pattern.endswith("/*"):
            if mime.startswith(pattern[:-1]):
                return True
        elif mime == pattern:
            return True
    return False
