# =============================================================================
# core/services/content_repository.py - Content Repository Interface
# =============================================================================
# One interface for portfolio content (site settings, projects, contact
# submissions) with two implementations:
# - SupabaseContentRepository: the authoritative remote tables
# - LocalContentRepository: local draft JSON blobs for prototyping
#
# The implementation is chosen once from settings.DATA_BACKEND
# (see app/dependencies.py).
#
# Every method follows the same failure contract: expected failures are
# logged and reported as a sentinel (None / False / default record),
# never raised to the caller.
# =============================================================================

from abc import ABC, abstractmethod

from core.models.contact import ContactFormData, ContactStatus, ContactSubmission
from core.models.project import Project, ProjectFormData
from core.models.site_settings import SiteSettings


class ContentRepository(ABC):
    """Read/write access to site settings, projects and contact submissions."""

    # -------------------------------------------------------------------------
    # Site Settings
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_site_settings(self) -> SiteSettings:
        """Stored settings, or the defaults if none are stored."""

    @abstractmethod
    def update_site_settings(self, site_settings: SiteSettings) -> SiteSettings | None:
        """Create the singleton or overwrite it; None if the write failed."""

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_projects(self) -> list[Project]:
        """All projects, newest first."""

    @abstractmethod
    def get_project(self, project_id: str) -> Project | None:
        ...

    @abstractmethod
    def get_project_by_slug(self, slug: str) -> Project | None:
        ...

    @abstractmethod
    def create_project(self, form: ProjectFormData) -> Project | None:
        """Insert a project with createdAt == updatedAt == now."""

    @abstractmethod
    def update_project(self, project_id: str, form: ProjectFormData) -> Project | None:
        """Replace a project's fields, keeping id and createdAt."""

    @abstractmethod
    def delete_project(self, project_id: str) -> bool:
        ...

    # -------------------------------------------------------------------------
    # Contact Submissions
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_submissions(self, status: ContactStatus | None = None) -> list[ContactSubmission]:
        """Submissions newest first, optionally only those with `status`."""

    @abstractmethod
    def get_submission(self, submission_id: str) -> ContactSubmission | None:
        ...

    @abstractmethod
    def create_submission(self, form: ContactFormData) -> ContactSubmission | None:
        """Store a new submission with status 'new'."""

    @abstractmethod
    def update_submission_status(self, submission_id: str, status: ContactStatus) -> bool:
        ...

    @abstractmethod
    def delete_submission(self, submission_id: str) -> bool:
        ...
