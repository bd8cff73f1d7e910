# =============================================================================
# core/services/sync_service.py - Local Draft -> Supabase Migration
# =============================================================================
# Pushes the local draft blobs into the Supabase tables. The run is one-way
# and can be replayed:
#
# 1. Site settings: update the existing singleton row, or insert one.
#    A failure here aborts the whole run.
# 2. Projects: matched to remote rows by exact title. A match is updated
#    in place (id and createdAt kept), otherwise a row is inserted.
#    A failed project is counted and the batch continues.
# 3. Contact submissions: always inserted, so a second run duplicates them
#    unless dedupe_submissions is set (match on email+message+created_at).
#
# Entity classes and the items within them are processed sequentially.
# =============================================================================

import logging
from datetime import datetime
from typing import Any, Callable

from lib.local_store import (
    CONTACT_SUBMISSIONS_KEY,
    PROJECTS_KEY,
    SITE_SETTINGS_KEY,
    LocalDraftStore,
)
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now
from app.exceptions import SyncError
from core.models.contact import ContactSubmission
from core.models.migration import MigrationResult, SyncStatus
from core.models.project import Project
from core.models.site_settings import SiteSettings
from core.services.supabase_repository import (
    CONTACT_SUBMISSIONS_TABLE,
    PROJECTS_TABLE,
    SITE_SETTINGS_TABLE,
)

logger = logging.getLogger(__name__)


class SyncService:
    """
    Content synchronizer from local drafts to Supabase.

    Args:
        store: Local draft store to read from (never modified)
        clock: Source of "now" for timestamps (injectable for tests)

    Example:
        result = SyncService(LocalDraftStore(".portfolio-data")).migrate()
        if result.has_failures:
            print(result.errors)
    """

    def __init__(self, store: LocalDraftStore, clock: Callable[[], datetime] = utc_now):
        self._store = store
        self._clock = clock

    def migrate(self, dedupe_submissions: bool = False) -> MigrationResult:
        """
        Run the migration.

        Args:
            dedupe_submissions: Skip submissions already present remotely
                instead of inserting duplicates

        Returns:
            Per-class counts; `success` is False only when a settings
            failure aborted the run
        """
        result = MigrationResult(started_at=self._clock())
        logger.info("Starting data migration to Supabase...")

        try:
            self._migrate_site_settings(result)
        except SyncError as e:
            logger.error(f"Data migration aborted: {e.message}")
            result.settings = SyncStatus.ERROR
            result.aborted = True
            result.errors.append(e.message)
            result.finished_at = self._clock()
            return result

        self._migrate_projects(result)
        self._migrate_submissions(result, dedupe_submissions)

        result.finished_at = self._clock()
        logger.info(
            "Data migration finished: settings=%s, projects +%d ~%d !%d, submissions +%d =%d !%d",
            result.settings.value,
            result.projects_inserted,
            result.projects_updated,
            result.projects_failed,
            result.submissions_inserted,
            result.submissions_skipped,
            result.submissions_failed,
        )
        return result

    # -------------------------------------------------------------------------
    # Site Settings
    # -------------------------------------------------------------------------

    def _migrate_site_settings(self, result: MigrationResult) -> None:
        """
        Raises:
            SyncError: If the settings row could not be written
        """
        draft = self._store.get(SITE_SETTINGS_KEY)
        if not draft:
            logger.info("No local site settings to migrate")
            return

        logger.info("Migrating site settings...")
        try:
            row = SiteSettings.model_validate(draft).to_row()
            row["updated_at"] = self._clock().isoformat()

            client = SupabaseClient.get_client()
            existing = SupabaseClient.fetch_first(SITE_SETTINGS_TABLE, columns="id")

            if existing:
                response = (
                    client.table(SITE_SETTINGS_TABLE)
                    .update(row)
                    .eq("id", existing["id"])
                    .execute()
                )
                action = "updated"
            else:
                response = client.table(SITE_SETTINGS_TABLE).insert(row).execute()
                action = "inserted"

            if not response.data:
                raise Exception(f"Settings {action[:-1]} returned no data")

        except Exception as e:
            raise SyncError("site settings", "singleton", str(e)) from e

        result.settings = SyncStatus.OK
        result.settings_action = action
        logger.info(f"Site settings {action}")

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def _migrate_projects(self, result: MigrationResult) -> None:
        drafts = self._store.get(PROJECTS_KEY) or []
        if not drafts:
            logger.info("No local projects to migrate")
            return

        logger.info(f"Migrating {len(drafts)} projects...")
        for draft in drafts:
            try:
                action = self._migrate_project(draft)
            except SyncError as e:
                logger.error(e.message)
                result.projects_failed += 1
                result.errors.append(e.message)
                continue

            if action == "inserted":
                result.projects_inserted += 1
            else:
                result.projects_updated += 1

    def _migrate_project(self, draft: dict[str, Any]) -> str:
        """
        Upsert one project by title.

        Returns:
            "inserted" or "updated"

        Raises:
            SyncError: If the draft is invalid or the write failed
        """
        title = draft.get("title") if isinstance(draft, dict) else None

        try:
            project = Project.model_validate(draft)
            now = self._clock()

            row = project.to_row()
            row["slug"] = project.effective_slug
            row["updatedAt"] = now.isoformat()

            client = SupabaseClient.get_client()
            existing = SupabaseClient.fetch_first(PROJECTS_TABLE, "title", project.title, columns="id")

            if existing:
                row.pop("createdAt", None)
                response = (
                    client.table(PROJECTS_TABLE)
                    .update(row)
                    .eq("id", existing["id"])
                    .execute()
                )
                action = "updated"
            else:
                row["createdAt"] = (project.created_at or now).isoformat()
                response = client.table(PROJECTS_TABLE).insert(row).execute()
                action = "inserted"

            if not response.data:
                raise Exception("Write returned no data")

        except Exception as e:
            raise SyncError("project", title or "<untitled>", str(e)) from e

        logger.info(f'Project "{project.title}" {action}')
        return action

    # -------------------------------------------------------------------------
    # Contact Submissions
    # -------------------------------------------------------------------------

    def _migrate_submissions(self, result: MigrationResult, dedupe: bool) -> None:
        drafts = self._store.get(CONTACT_SUBMISSIONS_KEY) or []
        if not drafts:
            logger.info("No local contact submissions to migrate")
            return

        logger.info(f"Migrating {len(drafts)} contact submissions...")
        for draft in drafts:
            email = draft.get("email") if isinstance(draft, dict) else None

            try:
                submission = ContactSubmission.model_validate(draft)
                row = submission.to_row()
                row["created_at"] = (submission.created_at or self._clock()).isoformat()

                if dedupe and self._submission_exists(row):
                    logger.info(f"Contact submission from {submission.email} already migrated, skipping")
                    result.submissions_skipped += 1
                    continue

                client = SupabaseClient.get_client()
                response = client.table(CONTACT_SUBMISSIONS_TABLE).insert(row).execute()
                if not response.data:
                    raise Exception("Insert returned no data")

            except Exception as e:
                error = SyncError("contact submission", email or "<unknown>", str(e))
                logger.error(error.message)
                result.submissions_failed += 1
                result.errors.append(error.message)
                continue

            result.submissions_inserted += 1
            logger.info(f"Contact submission from {submission.email} migrated")

    @staticmethod
    def _submission_exists(row: dict[str, Any]) -> bool:
        """True if a submission with the same email, message and created_at exists remotely."""
        client = SupabaseClient.get_client()
        response = (
            client.table(CONTACT_SUBMISSIONS_TABLE)
            .select("id")
            .eq("email", row["email"])
            .eq("message", row["message"])
            .eq("created_at", row["created_at"])
            .limit(1)
            .execute()
        )
        return bool(response.data)
