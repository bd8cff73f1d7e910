# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based admin gating using Supabase Auth tokens.
#
# Usage:
#   from app.auth import require_admin, AuthUser
#
#   @router.put("/settings")
#   async def save(admin: AuthUser = Depends(require_admin)):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models import AuthUser, TokenStatus

__all__ = [
    "get_current_user",
    "require_admin",
    "AuthUser",
    "TokenStatus",
]
