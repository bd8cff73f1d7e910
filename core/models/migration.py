# =============================================================================
# core/models/migration.py - Draft Migration Result
# =============================================================================
# Per-class summary of a local-draft -> Supabase migration run. Callers read
# the counters to spot partial failure instead of relying on a single flag.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, computed_field


class SyncStatus(str, Enum):
    """Outcome of migrating one entity class."""
    OK = "ok"
    ERROR = "error"
    SKIPPED = "skipped"  # nothing to migrate, or not reached


class MigrationResult(BaseModel):
    """
    Summary of one migration run.

    Example:
        {
            "settings": "ok",
            "settings_action": "updated",
            "projects_inserted": 1,
            "projects_updated": 4,
            "projects_failed": 0,
            "submissions_inserted": 2,
            "submissions_skipped": 0,
            "submissions_failed": 0,
            "errors": [],
            "aborted": false,
            "success": true,
            "has_failures": false
        }
    """

    settings: SyncStatus = SyncStatus.SKIPPED
    settings_action: Literal["inserted", "updated"] | None = None

    projects_inserted: int = 0
    projects_updated: int = 0
    projects_failed: int = 0

    submissions_inserted: int = 0
    submissions_skipped: int = 0
    submissions_failed: int = 0

    errors: list[str] = Field(default_factory=list)
    aborted: bool = Field(
        default=False,
        description="True when a settings failure stopped the run before projects/submissions"
    )

    started_at: datetime | None = None
    finished_at: datetime | None = None

    @computed_field
    @property
    def success(self) -> bool:
        """True unless a failure escaped its class's local handling."""
        return not self.aborted

    @computed_field
    @property
    def has_failures(self) -> bool:
        """True if anything at all failed, including single items."""
        return (
            self.settings == SyncStatus.ERROR
            or self.projects_failed > 0
            or self.submissions_failed > 0
        )
