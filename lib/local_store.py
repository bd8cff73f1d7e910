# =============================================================================
# lib/local_store.py - Local Draft Store
# =============================================================================
# Persists the prototype ("draft") content as three independently keyed JSON
# blobs in a directory:
#   siteSettings.json        - a single settings object
#   projects.json            - list of projects
#   contactSubmissions.json  - list of contact submissions
#
# Blobs are read once when the store is created and rewritten in full on
# every change. The content synchronizer reads the same blobs when migrating
# drafts into Supabase.
#
# Usage:
#   from lib.local_store import LocalDraftStore
#   store = LocalDraftStore(".portfolio-data")
#   projects = store.get("projects", [])
# =============================================================================

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SITE_SETTINGS_KEY = "siteSettings"
PROJECTS_KEY = "projects"
CONTACT_SUBMISSIONS_KEY = "contactSubmissions"

DRAFT_KEYS = (SITE_SETTINGS_KEY, PROJECTS_KEY, CONTACT_SUBMISSIONS_KEY)


class LocalDraftStore:
    """
    In-memory copy of the draft blobs, written through to disk.

    Callers get deep copies back from get(), so mutating a returned value
    never changes the store without an explicit set().
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self._blobs: dict[str, Any] = {}
        self._load()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _load(self) -> None:
        for key in DRAFT_KEYS:
            path = self._path(key)
            if not path.exists():
                continue
            try:
                self._blobs[key] = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                # An unreadable blob is treated as absent
                logger.warning(f"Ignoring unreadable draft blob {path}: {e}")

        logger.debug(f"Loaded draft blobs {sorted(self._blobs)} from {self.directory}")

    def has(self, key: str) -> bool:
        """True if the blob exists (was loaded or has been written)."""
        return key in self._blobs

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of a blob, or `default` if it was never stored."""
        if key not in self._blobs:
            return default
        return copy.deepcopy(self._blobs[key])

    def set(self, key: str, value: Any) -> None:
        """
        Replace a blob and persist it.

        Raises:
            ValueError: If key is not one of DRAFT_KEYS
            OSError: If the blob cannot be written
        """
        if key not in DRAFT_KEYS:
            raise ValueError(f"Unknown draft key: {key}")

        content = json.dumps(value, indent=2, default=str)
        self.directory.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory, then rename over the blob
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f"{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self._path(key))
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)

        # Memory only changes once the blob is on disk
        self._blobs[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        """Forget a blob and remove its file."""
        self._blobs.pop(key, None)
        self._path(key).unlink(missing_ok=True)
