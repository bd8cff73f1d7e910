# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The content backend (Supabase tables or local drafts) is chosen here,
# once, from settings.DATA_BACKEND.
# =============================================================================

import logging
from functools import lru_cache

from app.config import settings
from core.services.content_repository import ContentRepository
from core.services.local_repository import LocalContentRepository
from core.services.supabase_repository import SupabaseContentRepository
from core.services.sync_service import SyncService
from lib.local_store import LocalDraftStore

logger = logging.getLogger(__name__)


@lru_cache
def get_draft_store() -> LocalDraftStore:
    """The local draft store, read from disk once per process."""
    return LocalDraftStore(settings.LOCAL_DATA_DIR)


@lru_cache
def get_content_repository() -> ContentRepository:
    """
    Content repository for the configured backend.

    Returns the same instance for the life of the process.
    """
    if settings.DATA_BACKEND == "local":
        logger.info(f"Using local draft content from {settings.LOCAL_DATA_DIR}")
        return LocalContentRepository(get_draft_store())

    logger.info("Using Supabase content tables")
    return SupabaseContentRepository()


def get_sync_service() -> SyncService:
    """Synchronizer that pushes local drafts into Supabase."""
    return SyncService(get_draft_store())
