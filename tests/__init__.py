# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Portfolio API:
# - test_models.py / test_utils.py: Model validation and helpers
# - test_storage_service.py: Asset store against an in-memory Supabase
# - test_*_repository.py / test_local_store.py: Content backends
# - test_sync_service.py: Local draft -> Supabase migration
# - test_auth.py / test_routers.py: HTTP API
#
# Run tests with: poetry run pytest
# =============================================================================
