# =============================================================================
# core/models/asset.py - Media Asset Schemas
# =============================================================================
# - AssetFile: an upload candidate (name, MIME type, bytes)
# - Asset: an object stored in a bucket, with its public URL
# - Bucket: a named storage container
# - UploadNaming: how object keys are chosen on upload
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class UploadNaming(str, Enum):
    """
    Object key policy for uploads.

    - unique: `{random}_{timestamp}.{ext}`, never overwrites
    - original: the uploaded filename, overwriting any object with that name
    """
    UNIQUE = "unique"
    ORIGINAL = "original"


@dataclass
class AssetFile:
    """
    A file about to be uploaded.

    Kept as a plain dataclass since it carries raw bytes and never goes over
    the wire as JSON.
    """
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        """Lowercased extension without the dot ('' if none)."""
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()


class Bucket(BaseModel):
    """A storage bucket."""
    name: str
    public: bool = False


class Asset(BaseModel):
    """
    A stored object, decorated with its public URL.

    Example:
        {
            "name": "k3j2h1_1705312200000.png",
            "bucket": "portfolio-projects",
            "path": "covers/k3j2h1_1705312200000.png",
            "url": "https://xxx.supabase.co/storage/v1/object/public/portfolio-projects/covers/k3j2h1_1705312200000.png",
            "size": 48213,
            "content_type": "image/png"
        }
    """

    name: str
    bucket: str
    path: str
    url: str
    size: int | None = None
    content_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
