# =============================================================================
# app/routers/projects.py - Project Endpoints
# =============================================================================
# Public project listing/detail for the showcase; admin-only create,
# update and delete.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel

from app.auth import AuthUser, require_admin
from app.dependencies import get_content_repository
from app.exceptions import ContentSaveError, ProjectNotFoundError
from core.models.project import Project, ProjectFormData
from core.services.content_repository import ContentRepository

logger = logging.getLogger(__name__)

router = APIRouter()


class DeleteResponse(BaseModel):
    """Response for delete endpoints."""
    id: str
    deleted: bool


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=list[Project], response_model_by_alias=True)
async def list_projects(
    repository: ContentRepository = Depends(get_content_repository),
):
    """All projects, newest first."""
    return repository.list_projects()


@router.get("/{slug}", response_model=Project, response_model_by_alias=True)
async def get_project_by_slug(
    slug: Annotated[str, Path(description="Project slug")],
    repository: ContentRepository = Depends(get_content_repository),
):
    """A single project for its detail page."""
    project = repository.get_project_by_slug(slug)
    if project is None:
        raise ProjectNotFoundError(slug)
    return project


# =============================================================================
# Admin Endpoints
# =============================================================================

@router.post("", response_model=Project, response_model_by_alias=True, status_code=201)
async def create_project(
    form: ProjectFormData,
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    """
    Create a project from the admin form.

    The slug is derived from the title when left empty, and the main image
    is always the first gallery image.
    """
    project = repository.create_project(form)
    if project is None:
        raise ContentSaveError("project")
    return project


@router.put("/{project_id}", response_model=Project, response_model_by_alias=True)
async def update_project(
    project_id: Annotated[str, Path(description="Project id")],
    form: ProjectFormData,
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    """Replace a project's fields. The id and creation time never change."""
    if repository.get_project(project_id) is None:
        raise ProjectNotFoundError(project_id)

    project = repository.update_project(project_id, form)
    if project is None:
        raise ContentSaveError("project")
    return project


@router.delete("/{project_id}", response_model=DeleteResponse)
async def delete_project(
    project_id: Annotated[str, Path(description="Project id")],
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    """Delete a project. Its images stay in storage."""
    if repository.get_project(project_id) is None:
        raise ProjectNotFoundError(project_id)

    if not repository.delete_project(project_id):
        raise ContentSaveError("project")

    logger.info(f"Admin {admin.email or admin.id} deleted project {project_id}")
    return DeleteResponse(id=project_id, deleted=True)
