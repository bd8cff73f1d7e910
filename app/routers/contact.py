# =============================================================================
# app/routers/contact.py - Contact Form Endpoints
# =============================================================================
# Public contact form submission plus the admin inbox: list by status,
# change status, delete.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel

from app.auth import AuthUser, require_admin
from app.dependencies import get_content_repository
from app.exceptions import ContentSaveError, SubmissionNotFoundError
from core.models.contact import ContactFormData, ContactStatus, ContactSubmission
from core.services.content_repository import ContentRepository

router = APIRouter()


class StatusUpdateRequest(BaseModel):
    """New inbox status for a submission."""
    status: ContactStatus


class SubmissionActionResponse(BaseModel):
    id: str
    status: ContactStatus | None = None
    deleted: bool = False


@router.post("", response_model=ContactSubmission, response_model_by_alias=True, status_code=201)
async def submit_contact_form(
    form: ContactFormData,
    repository: ContentRepository = Depends(get_content_repository),
):
    """Store a message from the public contact form."""
    submission = repository.create_submission(form)
    if submission is None:
        raise ContentSaveError("contact submission")
    return submission


@router.get("/submissions", response_model=list[ContactSubmission], response_model_by_alias=True)
async def list_submissions(
    status: Annotated[ContactStatus | None, Query(description="Only submissions with this status")] = None,
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    """Contact submissions, newest first."""
    return repository.list_submissions(status)


@router.patch("/submissions/{submission_id}", response_model=SubmissionActionResponse)
async def update_submission_status(
    submission_id: Annotated[str, Path(description="Submission id")],
    request: StatusUpdateRequest,
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    """Move a submission to another inbox status (e.g. new -> read)."""
    if repository.get_submission(submission_id) is None:
        raise SubmissionNotFoundError(submission_id)

    if not repository.update_submission_status(submission_id, request.status):
        raise ContentSaveError("contact submission")
    return SubmissionActionResponse(id=submission_id, status=request.status)


@router.delete("/submissions/{submission_id}", response_model=SubmissionActionResponse)
async def delete_submission(
    submission_id: Annotated[str, Path(description="Submission id")],
    repository: ContentRepository = Depends(get_content_repository),
    admin: AuthUser = Depends(require_admin),
):
    if repository.get_submission(submission_id) is None:
        raise SubmissionNotFoundError(submission_id)

    if not repository.delete_submission(submission_id):
        raise ContentSaveError("contact submission")
    return SubmissionActionResponse(id=submission_id, deleted=True)
