# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-in itself happens client-side against Supabase Auth. The admin UI
# calls this route to check whether a stored token still grants access.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user, is_admin
from app.auth.models import AuthUser, TokenStatus

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/verify", response_model=TokenStatus)
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> TokenStatus:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return TokenStatus(
        valid=True,
        user_id=str(user.id),
        email=user.email,
        is_admin=is_admin(user),
    )
