# =============================================================================
# app/routers/media.py - Media Asset Endpoints
# =============================================================================
# Admin-only image upload, listing and deletion against Supabase Storage,
# plus the one-click bucket setup used by the admin storage panel.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile
from pydantic import BaseModel

from app.auth import AuthUser, require_admin
from app.config import settings
from app.exceptions import StorageError
from core.models.asset import Asset, AssetFile, Bucket
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class UploadResponse(BaseModel):
    url: str
    bucket: str
    filename: str
    size: int


class DeleteAssetResponse(BaseModel):
    bucket: str
    path: str
    deleted: bool


class StorageInitResponse(BaseModel):
    """Bucket name -> whether it exists after initialization."""
    buckets: dict[str, bool]
    ready: bool


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/upload", response_model=UploadResponse, status_code=201)
async def upload_media(
    file: Annotated[UploadFile, File(description="Image to upload")],
    bucket: Annotated[str | None, Form(description="Target bucket")] = None,
    path: Annotated[str | None, Form(description="Folder inside the bucket")] = None,
    admin: AuthUser = Depends(require_admin),
):
    """
    Upload an image and return its public URL.

    Size and type are checked before anything is sent to storage
    (413 / 415 on failure).
    """
    content = await file.read()
    asset_file = AssetFile(
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
        content=content,
    )
    target_bucket = bucket or settings.DEFAULT_BUCKET

    url = StorageService.upload(asset_file, bucket=target_bucket, path=path)
    if url is None:
        raise StorageError("upload", "The storage service rejected the file", bucket=target_bucket)

    return UploadResponse(
        url=url,
        bucket=target_bucket,
        filename=asset_file.filename,
        size=asset_file.size,
    )


@router.get("/buckets", response_model=list[Bucket])
async def list_buckets(
    admin: AuthUser = Depends(require_admin),
):
    """Buckets in the Supabase project, with their public-read flag."""
    return StorageService.list_buckets()


@router.post("/buckets/initialize", response_model=StorageInitResponse)
async def initialize_buckets(
    admin: AuthUser = Depends(require_admin),
):
    """Create the standard buckets if they don't exist yet."""
    results = StorageService.initialize_storage()
    return StorageInitResponse(buckets=results, ready=all(results.values()))


@router.get("/{bucket}", response_model=list[Asset])
async def list_media(
    bucket: Annotated[str, Path(description="Bucket name")],
    path: str | None = None,
    admin: AuthUser = Depends(require_admin),
):
    """Files directly under `path` in a bucket, sorted by name."""
    return StorageService.list_assets(bucket, path)


@router.delete("/{bucket}/{path:path}", response_model=DeleteAssetResponse)
async def delete_media(
    bucket: Annotated[str, Path(description="Bucket name")],
    path: Annotated[str, Path(description="Object key inside the bucket")],
    admin: AuthUser = Depends(require_admin),
):
    if not StorageService.delete_asset(path, bucket):
        raise StorageError("delete", f"Could not delete '{path}'", bucket=bucket)

    logger.info(f"Admin {admin.email or admin.id} deleted {bucket}/{path}")
    return DeleteAssetResponse(bucket=bucket, path=path, deleted=True)
