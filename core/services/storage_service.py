# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# The media asset lifecycle: bucket provisioning, validated upload, listing
# and deletion of images in Supabase Storage.
#
# Failure policy: client-side validation raises ValidationError before any
# network call; every storage failure is logged and surfaced as a sentinel
# (None / False / []), never retried.
# =============================================================================

import logging
import time
import uuid
from typing import Any

from lib.supabase_client import SupabaseClient
from lib.utils import matches_accept_pattern
from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError
from core.models.asset import Asset, AssetFile, Bucket, UploadNaming
from core.services.supabase_repository import CONTENT_TABLES

logger = logging.getLogger(__name__)

# Supabase keeps this marker object in "empty" folders
FOLDER_PLACEHOLDER = ".emptyFolderPlaceholder"

CACHE_CONTROL_SECONDS = "3600"


def bucket_name(bucket: Any) -> str | None:
    """Bucket name from either an SDK bucket object or a plain dict."""
    if isinstance(bucket, dict):
        return bucket.get("name")
    return getattr(bucket, "name", None)


def _join_key(path: str | None, name: str) -> str:
    prefix = (path or "").strip("/")
    return f"{prefix}/{name}" if prefix else name


class StorageService:
    """
    Asset Store backed by Supabase Storage.

    Buckets are created lazily on first use. Objects are addressed by
    (bucket, key) where key is `path/name`.
    """

    # -------------------------------------------------------------------------
    # Buckets
    # -------------------------------------------------------------------------

    @staticmethod
    def ensure_bucket(name: str, is_public: bool = True) -> bool:
        """
        Make sure a bucket exists, creating it if needed.

        An "already exists" error from the create call counts as success,
        so concurrent callers both get True. Making a new bucket public is
        best effort: a failed visibility update is logged and ignored.

        Args:
            name: Bucket name
            is_public: Whether objects should be publicly readable

        Returns:
            True if the bucket exists afterwards
        """
        try:
            client = SupabaseClient.get_client()
        except Exception as e:
            logger.error(f"Cannot check bucket '{name}': {e}")
            return False

        existing: set[str] = set()
        try:
            buckets = client.storage.list_buckets()
            existing = {bucket_name(b) for b in buckets or []}
        except Exception as e:
            logger.error(f"Error listing buckets, attempting to create '{name}' anyway: {e}")

        if name in existing:
            logger.debug(f"Bucket '{name}' already exists")
            return True

        try:
            client.storage.create_bucket(name, options={"public": is_public})
        except Exception as e:
            message = str(e).lower()
            if "already exists" in message or "duplicate" in message:
                logger.info(f"Bucket '{name}' already exists (from create error)")
                return True
            logger.error(f"Error creating bucket '{name}': {e}")
            return False

        logger.info(f"Bucket '{name}' created successfully")

        if is_public and not StorageService.update_bucket_visibility(name, True):
            logger.warning(f"Bucket '{name}' was created but could not be made public")

        return True

    @staticmethod
    def list_buckets() -> list[Bucket]:
        """All buckets in the project; empty if the listing failed."""
        try:
            client = SupabaseClient.get_client()
            buckets = client.storage.list_buckets()
        except Exception as e:
            logger.error(f"Error listing buckets: {e}")
            return []

        result = []
        for bucket in buckets or []:
            if isinstance(bucket, dict):
                result.append(Bucket(name=bucket.get("name"), public=bool(bucket.get("public"))))
            else:
                result.append(Bucket(name=bucket.name, public=bool(getattr(bucket, "public", False))))
        return sorted(result, key=lambda b: b.name)

    @staticmethod
    def update_bucket_visibility(name: str, is_public: bool) -> bool:
        """
        Set a bucket's public-read flag.

        Returns:
            True if the update succeeded
        """
        try:
            client = SupabaseClient.get_client()
            client.storage.update_bucket(name, options={"public": is_public})
            logger.info(f"Bucket '{name}' set to {'public' if is_public else 'private'}")
            return True
        except Exception as e:
            logger.error(f"Error updating bucket '{name}' visibility: {e}")
            return False

    @staticmethod
    def initialize_storage() -> dict[str, bool]:
        """
        Provision the buckets the site uses and probe the content tables.

        Safe to run on every startup.

        Returns:
            Bucket name -> whether it exists now
        """
        results = {}
        for bucket in settings.site_buckets:
            results[bucket] = StorageService.ensure_bucket(bucket, is_public=True)

        for table in CONTENT_TABLES:
            if SupabaseClient.table_exists(table):
                logger.info(f"Table '{table}' is reachable")
            else:
                logger.warning(f"Table '{table}' is missing or not readable")

        logger.info(f"Storage initialization completed: {results}")
        return results

    # -------------------------------------------------------------------------
    # Validation and Naming
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_file(
        file: AssetFile,
        max_size_bytes: int | None = None,
        accepted_types: list[str] | None = None,
    ) -> None:
        """
        Check size and MIME type before anything touches the network.

        Args:
            file: The upload candidate
            max_size_bytes: Size limit (defaults to MAX_UPLOAD_SIZE_MB)
            accepted_types: Accept patterns (defaults to ACCEPTED_FILE_TYPES)

        Raises:
            FileTooLargeError: If the file is over the limit
            InvalidFileTypeError: If the MIME type doesn't match
        """
        if max_size_bytes is None:
            max_size_bytes = settings.max_upload_size_bytes
        if accepted_types is None:
            accepted_types = settings.accepted_file_types_list

        if file.size > max_size_bytes:
            raise FileTooLargeError(file.size, max_size_bytes)

        if not matches_accept_pattern(file.content_type, accepted_types):
            raise InvalidFileTypeError(file.content_type, accepted_types)

    @staticmethod
    def build_object_key(
        filename: str,
        path: str | None = None,
        naming: UploadNaming | None = None,
    ) -> str:
        """
        Choose the object key for an upload.

        Example:
            build_object_key("Cover.PNG", "covers")                  -> "covers/3f9a1c2e_1705312200000.png"
            build_object_key("cover.png", None, UploadNaming.ORIGINAL) -> "cover.png"
        """
        naming = naming or UploadNaming(settings.UPLOAD_NAMING)

        if naming == UploadNaming.ORIGINAL:
            name = filename.rsplit("/", 1)[-1]
        else:
            extension = AssetFile(filename, "", b"").extension
            name = f"{uuid.uuid4().hex[:8]}_{int(time.time() * 1000)}"
            if extension:
                name = f"{name}.{extension}"

        return _join_key(path, name)

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    @staticmethod
    def upload(
        file: AssetFile,
        bucket: str | None = None,
        path: str | None = None,
        naming: UploadNaming | None = None,
    ) -> str | None:
        """
        Upload an image and return its public URL.

        Args:
            file: The upload candidate
            bucket: Target bucket (defaults to DEFAULT_BUCKET)
            path: Optional folder inside the bucket
            naming: Key policy (defaults to UPLOAD_NAMING)

        Returns:
            Public URL, or None if the bucket or upload failed

        Raises:
            ValidationError: If the file fails size/type checks
        """
        bucket = bucket or settings.DEFAULT_BUCKET
        naming = naming or UploadNaming(settings.UPLOAD_NAMING)

        StorageService.validate_file(file)

        if not StorageService.ensure_bucket(bucket, is_public=True):
            logger.error(f"Upload aborted: bucket '{bucket}' is unavailable")
            return None

        key = StorageService.build_object_key(file.filename, path, naming)
        logger.info(f"Uploading file to {bucket}/{key} ({file.size} bytes)")

        try:
            client = SupabaseClient.get_client()
            client.storage.from_(bucket).upload(
                path=key,
                file=file.content,
                file_options={
                    "content-type": file.content_type,
                    "cache-control": CACHE_CONTROL_SECONDS,
                    "upsert": "true" if naming == UploadNaming.ORIGINAL else "false",
                },
            )
            return StorageService.get_public_url(key, bucket)

        except Exception as e:
            logger.error(f"Storage upload failed for {bucket}/{key}: {e}")
            return None

    @staticmethod
    def list_assets(bucket: str | None = None, path: str | None = None) -> list[Asset]:
        """
        List the objects directly under `path` (folders excluded).

        Returns:
            Assets sorted by name; empty if the bucket is empty or the
            listing failed
        """
        bucket = bucket or settings.DEFAULT_BUCKET
        StorageService.ensure_bucket(bucket, is_public=True)

        try:
            client = SupabaseClient.get_client()
            items = client.storage.from_(bucket).list(
                path or "",
                {"sortBy": {"column": "name", "order": "asc"}},
            )
        except Exception as e:
            logger.error(f"Failed to list files in {bucket}/{path or ''}: {e}")
            return []

        assets = []
        for item in items or []:
            name = item.get("name") or ""
            # Folders come back without an id
            if not name or item.get("id") is None or name.endswith("/") or name == FOLDER_PLACEHOLDER:
                continue

            key = _join_key(path, name)
            metadata = item.get("metadata") or {}
            assets.append(Asset(
                name=name,
                bucket=bucket,
                path=key,
                url=StorageService.get_public_url(key, bucket),
                size=metadata.get("size"),
                content_type=metadata.get("mimetype"),
                metadata=metadata,
            ))

        logger.debug(f"Listed {len(assets)} assets in {bucket}/{path or ''}")
        return assets

    @staticmethod
    def delete_asset(path: str, bucket: str | None = None) -> bool:
        """
        Delete one object by its exact key.

        Deleting a key that doesn't exist is not an error.

        Returns:
            True if the remove call succeeded
        """
        bucket = bucket or settings.DEFAULT_BUCKET

        try:
            client = SupabaseClient.get_client()
            client.storage.from_(bucket).remove([path])
            logger.info(f"Deleted file from storage: {bucket}/{path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete {bucket}/{path}: {e}")
            return False

    @staticmethod
    def get_public_url(path: str, bucket: str | None = None) -> str:
        """
        Public URL of an object.

        Format: {SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}
        """
        bucket = bucket or settings.DEFAULT_BUCKET
        client = SupabaseClient.get_client()
        # Some SDK versions append an empty query string
        return client.storage.from_(bucket).get_public_url(path).rstrip("?")
