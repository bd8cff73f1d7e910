# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Singleton Supabase client and row lookup helpers
# - local_store.py: Local draft store (three JSON blobs on disk)
# - utils.py: Shared helpers (slugs, tags, timestamps, MIME matching)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.local_store import LocalDraftStore, DRAFT_KEYS
from lib.utils import (
    matches_accept_pattern,
    normalize_uuid,
    slugify,
    split_tags,
    tag_color,
    utc_now,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Local drafts
    "LocalDraftStore",
    "DRAFT_KEYS",
    # Utils
    "matches_accept_pattern",
    "normalize_uuid",
    "slugify",
    "split_tags",
    "tag_color",
    "utc_now",
]
