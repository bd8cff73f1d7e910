# =============================================================================
# app/routers/migration.py - Local Draft Migration Endpoint
# =============================================================================
# Pushes the locally edited drafts (settings, projects, submissions) into
# the Supabase tables. Admin only.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, require_admin
from app.dependencies import get_sync_service
from core.models.migration import MigrationResult
from core.services.sync_service import SyncService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/migrate", response_model=MigrationResult)
async def migrate_local_drafts(
    dedupe_submissions: bool = Query(
        False,
        description="Skip submissions already present remotely (same email, message and time)",
    ),
    sync_service: SyncService = Depends(get_sync_service),
    admin: AuthUser = Depends(require_admin),
):
    """
    Run the local -> Supabase migration.

    Always answers 200 with the per-class summary. `success` is False only
    when the run was aborted by a site settings failure; individual project
    or submission failures are listed in `errors`.
    """
    logger.info(f"Migration started by {admin.email or admin.id}")
    return sync_service.migrate(dedupe_submissions=dedupe_submissions)
