# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - site_settings.py: Landing page settings
# - projects.py: Project showcase and admin project editing
# - contact.py: Contact form and the admin inbox
# - media.py: Image upload, listing and deletion
# - migration.py: Local draft -> Supabase migration
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import site_settings
from . import projects
from . import contact
from . import media
from . import migration

__all__ = [
    "health",
    "site_settings",
    "projects",
    "contact",
    "media",
    "migration",
]
