# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .content_repository import ContentRepository
from .local_repository import LocalContentRepository
from .storage_service import StorageService
from .supabase_repository import SupabaseContentRepository
from .sync_service import SyncService

__all__ = [
    "ContentRepository",
    "LocalContentRepository",
    "StorageService",
    "SupabaseContentRepository",
    "SyncService",
]
