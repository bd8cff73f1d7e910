# =============================================================================
# app/routers/site_settings.py - Site Settings Endpoints
# =============================================================================
# Public read of the landing page settings; admin-only update.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, require_admin
from app.dependencies import get_content_repository
from app.exceptions import ContentSaveError
from core.models.site_settings import SiteSettings
from core.services.content_repository import ContentRepository

router = APIRouter()


@router.get("", response_model=SiteSettings, response_model_by_alias=True)
async def get_site_settings(
    repository: ContentRepository = Depends(get_content_repository),
):
    """Owner details, hero copy and social links for the landing page."""
    return repository.get_site_settings()


@router.put("", response_model=SiteSettings, response_model_by_alias=True)
async def update_site_settings(
    site_settings: SiteSettings,
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    """
    Save the site settings.

    Creates the settings record on first save; afterwards overwrites it.
    """
    saved = repository.update_site_settings(site_settings)
    if saved is None:
        raise ContentSaveError("site settings")
    return saved
