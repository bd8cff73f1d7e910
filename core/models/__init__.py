# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the schemas for portfolio content and media:
# - asset.py: uploads, stored assets, buckets
# - project.py: projects and the admin project form
# - site_settings.py: singleton site settings and social links
# - contact.py: contact form and stored submissions
# - migration.py: local-draft migration summary
# =============================================================================

from .asset import Asset, AssetFile, Bucket, UploadNaming
from .contact import ContactFormData, ContactStatus, ContactSubmission
from .migration import MigrationResult, SyncStatus
from .project import DisplayType, Project, ProjectFormData, ProjectImage, Technology
from .site_settings import SiteSettings, SocialLink, default_site_settings

__all__ = [
    # Assets
    "Asset",
    "AssetFile",
    "Bucket",
    "UploadNaming",
    # Contact
    "ContactFormData",
    "ContactStatus",
    "ContactSubmission",
    # Migration
    "MigrationResult",
    "SyncStatus",
    # Projects
    "DisplayType",
    "Project",
    "ProjectFormData",
    "ProjectImage",
    "Technology",
    # Site settings
    "SiteSettings",
    "SocialLink",
    "default_site_settings",
]
