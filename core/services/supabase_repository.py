# =============================================================================
# core/services/supabase_repository.py - Supabase Content Repository
# =============================================================================
# Content CRUD against the Supabase tables:
#   site_settings        (singleton, snake_case columns)
#   projects             (camelCase columns)
#   contact_submissions  (snake_case columns)
# =============================================================================

import logging
from datetime import datetime
from typing import Callable

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now
from core.models.contact import ContactFormData, ContactStatus, ContactSubmission
from core.models.project import Project, ProjectFormData
from core.models.site_settings import SiteSettings, default_site_settings
from core.services.content_repository import ContentRepository

logger = logging.getLogger(__name__)

SITE_SETTINGS_TABLE = "site_settings"
PROJECTS_TABLE = "projects"
CONTACT_SUBMISSIONS_TABLE = "contact_submissions"

CONTENT_TABLES = (PROJECTS_TABLE, CONTACT_SUBMISSIONS_TABLE, SITE_SETTINGS_TABLE)


class SupabaseContentRepository(ContentRepository):
    """
    Content repository backed by Supabase tables.

    Args:
        clock: Source of "now" for timestamps (injectable for tests)
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    # -------------------------------------------------------------------------
    # Site Settings
    # -------------------------------------------------------------------------

    def get_site_settings(self) -> SiteSettings:
        try:
            row = SupabaseClient.fetch_first(SITE_SETTINGS_TABLE)
            if not row:
                logger.debug("No site settings stored, using defaults")
                return default_site_settings()
            return SiteSettings.model_validate(row)

        except Exception as e:
            logger.error(f"Failed to fetch site settings: {e}")
            return default_site_settings()

    def update_site_settings(self, site_settings: SiteSettings) -> SiteSettings | None:
        """
        Write the singleton settings row.

        Updates the existing row (by id) if there is one, otherwise inserts.
        """
        row = site_settings.to_row()
        row["updated_at"] = self._clock().isoformat()

        try:
            client = SupabaseClient.get_client()
            existing = SupabaseClient.fetch_first(SITE_SETTINGS_TABLE, columns="id")

            if existing:
                response = (
                    client.table(SITE_SETTINGS_TABLE)
                    .update(row)
                    .eq("id", existing["id"])
                    .execute()
                )
            else:
                response = client.table(SITE_SETTINGS_TABLE).insert(row).execute()

            if response.data:
                logger.info("Site settings saved")
                return SiteSettings.model_validate(response.data[0])

            raise Exception("Write returned no data")

        except Exception as e:
            logger.error(f"Failed to update site settings: {e}")
            return None

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def list_projects(self) -> list[Project]:
        try:
            client = SupabaseClient.get_client()
            response = (
                client.table(PROJECTS_TABLE)
                .select("*")
                .order("createdAt", desc=True)
                .execute()
            )
            return [Project.model_validate(row) for row in response.data or []]

        except Exception as e:
            logger.error(f"Failed to list projects: {e}")
            return []

    def get_project(self, project_id: str) -> Project | None:
        try:
            row = SupabaseClient.fetch_by_id(PROJECTS_TABLE, project_id)
            return Project.model_validate(row) if row else None
        except Exception as e:
            logger.error(f"Failed to fetch project {project_id}: {e}")
            return None

    def get_project_by_slug(self, slug: str) -> Project | None:
        """
        Find a project by its stored slug.

        Rows saved without a slug are matched on the slug derived from
        their title, the same as the local backend.
        """
        try:
            row = SupabaseClient.fetch_first(PROJECTS_TABLE, "slug", slug)
            if row:
                return Project.model_validate(row)
        except Exception as e:
            logger.error(f"Failed to fetch project by slug '{slug}': {e}")
            return None

        return next(
            (p for p in self.list_projects() if not p.slug and p.effective_slug == slug),
            None,
        )

    def create_project(self, form: ProjectFormData) -> Project | None:
        now = self._clock()
        project = Project(**form.to_project_fields(), created_at=now, updated_at=now)

        try:
            client = SupabaseClient.get_client()
            response = client.table(PROJECTS_TABLE).insert(project.to_row()).execute()

            if response.data:
                created = Project.model_validate(response.data[0])
                logger.info(f"Created project: {created.id} ({created.title})")
                return created

            raise Exception("Insert returned no data")

        except Exception as e:
            logger.error(f"Failed to create project '{form.title}': {e}")
            return None

    def update_project(self, project_id: str, form: ProjectFormData) -> Project | None:
        row = Project(**form.to_project_fields()).to_row()
        row.pop("createdAt", None)
        row["updatedAt"] = self._clock().isoformat()

        try:
            client = SupabaseClient.get_client()
            response = (
                client.table(PROJECTS_TABLE)
                .update(row)
                .eq("id", normalize_uuid(project_id))
                .execute()
            )

            if response.data:
                logger.info(f"Updated project: {project_id}")
                return Project.model_validate(response.data[0])

            logger.warning(f"Project {project_id} not found for update")
            return None

        except Exception as e:
            logger.error(f"Failed to update project {project_id}: {e}")
            return None

    def delete_project(self, project_id: str) -> bool:
        try:
            client = SupabaseClient.get_client()
            client.table(PROJECTS_TABLE).delete().eq("id", normalize_uuid(project_id)).execute()
            logger.info(f"Deleted project: {project_id}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            return False

    # -------------------------------------------------------------------------
    # Contact Submissions
    # -------------------------------------------------------------------------

    def list_submissions(self, status: ContactStatus | None = None) -> list[ContactSubmission]:
        try:
            client = SupabaseClient.get_client()
            query = client.table(CONTACT_SUBMISSIONS_TABLE).select("*")
            if status:
                query = query.eq("status", ContactStatus(status).value)
            response = query.order("created_at", desc=True).execute()

            submissions = [ContactSubmission.model_validate(row) for row in response.data or []]
            logger.debug(
                f"Fetched {len(submissions)} contact submissions"
                + (f" with status: {ContactStatus(status).value}" if status else "")
            )
            return submissions

        except Exception as e:
            logger.error(f"Failed to list contact submissions: {e}")
            return []

    def get_submission(self, submission_id: str) -> ContactSubmission | None:
        try:
            row = SupabaseClient.fetch_by_id(CONTACT_SUBMISSIONS_TABLE, submission_id)
            return ContactSubmission.model_validate(row) if row else None
        except Exception as e:
            logger.error(f"Failed to fetch contact submission {submission_id}: {e}")
            return None

    def create_submission(self, form: ContactFormData) -> ContactSubmission | None:
        submission = ContactSubmission(
            name=form.name,
            email=form.email,
            message=form.message,
            status=ContactStatus.NEW,
            created_at=self._clock(),
        )

        try:
            client = SupabaseClient.get_client()
            response = client.table(CONTACT_SUBMISSIONS_TABLE).insert(submission.to_row()).execute()

            if response.data:
                created = ContactSubmission.model_validate(response.data[0])
                logger.info(f"Saved contact submission {created.id} from {created.email}")
                return created

            raise Exception("Insert returned no data")

        except Exception as e:
            logger.error(f"Failed to save contact submission from {form.email}: {e}")
            return None

    def update_submission_status(self, submission_id: str, status: ContactStatus) -> bool:
        try:
            client = SupabaseClient.get_client()
            response = (
                client.table(CONTACT_SUBMISSIONS_TABLE)
                .update({"status": ContactStatus(status).value})
                .eq("id", normalize_uuid(submission_id))
                .execute()
            )
            if not response.data:
                logger.warning(f"Contact submission {submission_id} not found for status update")
                return False

            logger.info(f"Contact submission {submission_id} marked {ContactStatus(status).value}")
            return True

        except Exception as e:
            logger.error(f"Failed to update contact submission {submission_id}: {e}")
            return False

    def delete_submission(self, submission_id: str) -> bool:
        try:
            client = SupabaseClient.get_client()
            client.table(CONTACT_SUBMISSIONS_TABLE).delete().eq("id", normalize_uuid(submission_id)).execute()
            logger.info(f"Deleted contact submission: {submission_id}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete contact submission {submission_id}: {e}")
            return False
