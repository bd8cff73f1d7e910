# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    PortfolioException,
    portfolio_exception_handler,
    validation_exception_handler,
)
from app.routers import health, site_settings, projects, contact, media, migration
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: report config problems, optionally provision storage buckets
    - Shutdown: log only, the Supabase client holds no open resources
    """
    logger.info(f"Starting Portfolio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Content backend: {settings.DATA_BACKEND}")

    missing = settings.missing_supabase_settings
    if missing:
        logger.error(
            f"Missing Supabase configuration: {', '.join(missing)}. "
            "Content and media requests will fail until these are set."
        )
    elif settings.INIT_STORAGE_ON_STARTUP:
        from core.services.storage_service import StorageService
        StorageService.initialize_storage()

    yield

    logger.info("Shutting down Portfolio API")


# Create FastAPI application
app = FastAPI(
    title="Portfolio API",
    description="""
## Portfolio Site Backend

Content and media API for a personal portfolio site backed by Supabase.

### Public

- **Site Settings** - owner details, hero copy, social links
- **Projects** - the project showcase, newest first, by slug
- **Contact** - submit the contact form

### Admin (Supabase Auth bearer token)

- Edit settings and projects
- Work the contact inbox (new / read / replied / archived)
- Upload and manage images in storage buckets
- Migrate locally drafted content into Supabase
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify admin tokens"},
        {"name": "Site Settings", "description": "Landing page settings"},
        {"name": "Projects", "description": "Project showcase"},
        {"name": "Contact", "description": "Contact form and inbox"},
        {"name": "Media", "description": "Image storage"},
        {"name": "Admin", "description": "Content migration"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PortfolioException)
async def handle_portfolio_exception(request: Request, exc: PortfolioException):
    """Handle custom portfolio exceptions."""
    return await portfolio_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints (router carries its own /auth prefix)
app.include_router(auth_routes.router, prefix="/api/v1")

app.include_router(health.router, prefix="/api/v1", tags=["Health"])

app.include_router(site_settings.router, prefix="/api/v1/settings", tags=["Site Settings"])

app.include_router(projects.router, prefix="/api/v1/projects", tags=["Projects"])

app.include_router(contact.router, prefix="/api/v1/contact", tags=["Contact"])

app.include_router(media.router, prefix="/api/v1/media", tags=["Media"])

app.include_router(migration.router, prefix="/api/v1/admin", tags=["Admin"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Portfolio API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
