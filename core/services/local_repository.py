# =============================================================================
# core/services/local_repository.py - Local Draft Content Repository
# =============================================================================
# Content CRUD against the local draft blobs (lib/local_store.py). Used to
# prototype the site before Supabase is wired in; the drafts can later be
# pushed to Supabase with core/services/sync_service.py.
#
# Missing blobs are seeded with sample content on first use, and every
# mutation rewrites the affected blob.
# =============================================================================

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from lib.local_store import (
    CONTACT_SUBMISSIONS_KEY,
    PROJECTS_KEY,
    SITE_SETTINGS_KEY,
    LocalDraftStore,
)
from lib.utils import utc_now
from core.models.contact import ContactFormData, ContactStatus, ContactSubmission
from core.models.project import Project, ProjectFormData
from core.models.site_settings import SiteSettings, default_site_settings
from core.services.content_repository import ContentRepository

logger = logging.getLogger(__name__)

LOCAL_SETTINGS_ID = "local-settings"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _sample_projects(now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "id": "project-1",
            "title": "E-commerce Website",
            "description": (
                "A modern e-commerce platform with a sleek UI, shopping cart "
                "functionality, and secure payment processing."
            ),
            "imageUrl": "https://images.unsplash.com/photo-1523474253046-8cd2748b5fd2?q=80&w=2070",
            "tags": ["React", "Node.js", "Stripe"],
            "demoUrl": "https://example.com/ecommerce",
            "githubUrl": "https://github.com/example/ecommerce",
            "year": "2023",
            "category": "Web Development",
            "images": [
                {"src": "https://images.unsplash.com/photo-1523474253046-8cd2748b5fd2?q=80&w=2070", "alt": "E-commerce homepage"},
                {"src": "https://images.unsplash.com/photo-1472851294608-062f824d29cc?q=80&w=2070", "alt": "Product listing page"},
            ],
            "technologies": [
                {"name": "React", "color": "bg-blue-100 text-blue-800"},
                {"name": "Node.js", "color": "bg-green-100 text-green-800"},
            ],
            "displayType": "popup",
            "slug": "ecommerce-website",
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        },
        {
            "id": "project-2",
            "title": "Portfolio Website",
            "description": (
                "A personal portfolio website with smooth animations and a "
                "responsive design to showcase creative work."
            ),
            "imageUrl": "https://images.unsplash.com/photo-1517292987719-0369a794ec0f?q=80&w=2070",
            "tags": ["React", "Framer Motion", "Tailwind CSS"],
            "demoUrl": "https://example.com/portfolio",
            "githubUrl": "https://github.com/example/portfolio",
            "year": "2023",
            "category": "Web Development",
            "images": [
                {"src": "https://images.unsplash.com/photo-1517292987719-0369a794ec0f?q=80&w=2070", "alt": "Portfolio homepage"},
                {"src": "https://images.unsplash.com/photo-1522542550221-31fd19575a2d?q=80&w=2070", "alt": "Projects section"},
            ],
            "technologies": [
                {"name": "React", "color": "bg-blue-100 text-blue-800"},
                {"name": "Tailwind CSS", "color": "bg-cyan-100 text-cyan-800"},
            ],
            "displayType": "popup",
            "slug": "portfolio-website",
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        },
    ]


def _sample_submissions(now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "id": "submission-1",
            "name": "Jane Smith",
            "email": "jane@example.com",
            "message": (
                "I'm interested in hiring you for a web development project. "
                "Please contact me to discuss details."
            ),
            "status": "new",
            "createdAt": now.isoformat(),
        },
        {
            "id": "submission-2",
            "name": "John Brown",
            "email": "john@example.com",
            "message": (
                "Your portfolio is impressive! I'd like to discuss a potential "
                "collaboration on an upcoming project."
            ),
            "status": "read",
            "createdAt": (now - timedelta(days=1)).isoformat(),
        },
    ]


def _sort_key(value: datetime | None) -> datetime:
    # Undated items sort last; naive timestamps are taken as UTC
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _newest_first(items: list, key: Callable[[Any], datetime | None]) -> list:
    return sorted(items, key=lambda item: _sort_key(key(item)), reverse=True)


class LocalContentRepository(ContentRepository):
    """
    Content repository backed by local draft blobs.

    Args:
        store: The draft store to read and write
        clock: Source of "now" for timestamps (injectable for tests)
        seed_samples: Write sample content for any blob that doesn't exist yet
    """

    def __init__(
        self,
        store: LocalDraftStore,
        clock: Callable[[], datetime] = utc_now,
        seed_samples: bool = True,
    ):
        self._store = store
        self._clock = clock
        if seed_samples:
            self._seed()

    def _seed(self) -> None:
        now = self._clock()
        seeds = {
            SITE_SETTINGS_KEY: lambda: default_site_settings().to_draft(),
            PROJECTS_KEY: lambda: _sample_projects(now),
            CONTACT_SUBMISSIONS_KEY: lambda: _sample_submissions(now),
        }
        for key, build in seeds.items():
            if not self._store.has(key):
                self._store.set(key, build())
                logger.info(f"Seeded local draft '{key}' with sample content")

    def _load_projects(self) -> list[Project]:
        return [Project.model_validate(p) for p in self._store.get(PROJECTS_KEY, [])]

    def _save_projects(self, projects: list[Project]) -> None:
        self._store.set(PROJECTS_KEY, [p.to_draft() for p in projects])

    def _load_submissions(self) -> list[ContactSubmission]:
        return [ContactSubmission.model_validate(s) for s in self._store.get(CONTACT_SUBMISSIONS_KEY, [])]

    def _save_submissions(self, submissions: list[ContactSubmission]) -> None:
        self._store.set(CONTACT_SUBMISSIONS_KEY, [s.to_draft() for s in submissions])

    # -------------------------------------------------------------------------
    # Site Settings
    # -------------------------------------------------------------------------

    def get_site_settings(self) -> SiteSettings:
        draft = self._store.get(SITE_SETTINGS_KEY)
        if not draft:
            return default_site_settings()
        try:
            return SiteSettings.model_validate(draft)
        except Exception as e:
            logger.error(f"Local site settings are invalid, using defaults: {e}")
            return default_site_settings()

    def update_site_settings(self, site_settings: SiteSettings) -> SiteSettings | None:
        updated = site_settings.model_copy(update={
            "id": site_settings.id or LOCAL_SETTINGS_ID,
            "updated_at": self._clock(),
        })
        try:
            self._store.set(SITE_SETTINGS_KEY, updated.to_draft())
            return updated
        except Exception as e:
            logger.error(f"Failed to save local site settings: {e}")
            return None

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def list_projects(self) -> list[Project]:
        try:
            return _newest_first(self._load_projects(), key=lambda p: p.created_at)
        except Exception as e:
            logger.error(f"Failed to read local projects: {e}")
            return []

    def get_project(self, project_id: str) -> Project | None:
        return next((p for p in self.list_projects() if p.id == project_id), None)

    def get_project_by_slug(self, slug: str) -> Project | None:
        return next((p for p in self.list_projects() if p.effective_slug == slug), None)

    def create_project(self, form: ProjectFormData) -> Project | None:
        now = self._clock()
        project = Project(
            **form.to_project_fields(),
            id=f"project-{uuid.uuid4().hex[:12]}",
            created_at=now,
            updated_at=now,
        )
        try:
            self._save_projects(self._load_projects() + [project])
            logger.info(f"Created local project: {project.id} ({project.title})")
            return project
        except Exception as e:
            logger.error(f"Failed to create local project '{form.title}': {e}")
            return None

    def update_project(self, project_id: str, form: ProjectFormData) -> Project | None:
        try:
            projects = self._load_projects()
            for index, existing in enumerate(projects):
                if existing.id != project_id:
                    continue
                updated = existing.model_copy(update={
                    **form.to_project_fields(),
                    "updated_at": self._clock(),
                })
                projects[index] = updated
                self._save_projects(projects)
                logger.info(f"Updated local project: {project_id}")
                return updated

            logger.warning(f"Local project {project_id} not found for update")
            return None

        except Exception as e:
            logger.error(f"Failed to update local project {project_id}: {e}")
            return None

    def delete_project(self, project_id: str) -> bool:
        try:
            self._save_projects([p for p in self._load_projects() if p.id != project_id])
            return True
        except Exception as e:
            logger.error(f"Failed to delete local project {project_id}: {e}")
            return False

    # -------------------------------------------------------------------------
    # Contact Submissions
    # -------------------------------------------------------------------------

    def list_submissions(self, status: ContactStatus | None = None) -> list[ContactSubmission]:
        try:
            submissions = self._load_submissions()
        except Exception as e:
            logger.error(f"Failed to read local contact submissions: {e}")
            return []

        if status:
            submissions = [s for s in submissions if s.status == ContactStatus(status)]
        return _newest_first(submissions, key=lambda s: s.created_at)

    def get_submission(self, submission_id: str) -> ContactSubmission | None:
        return next((s for s in self.list_submissions() if s.id == submission_id), None)

    def create_submission(self, form: ContactFormData) -> ContactSubmission | None:
        submission = ContactSubmission(
            id=f"submission-{uuid.uuid4().hex[:12]}",
            name=form.name,
            email=form.email,
            message=form.message,
            status=ContactStatus.NEW,
            created_at=self._clock(),
        )
        try:
            self._save_submissions([submission] + self._load_submissions())
            logger.info(f"Saved local contact submission {submission.id} from {submission.email}")
            return submission
        except Exception as e:
            logger.error(f"Failed to save local contact submission from {form.email}: {e}")
            return None

    def update_submission_status(self, submission_id: str, status: ContactStatus) -> bool:
        try:
            submissions = self._load_submissions()
            found = False
            for index, submission in enumerate(submissions):
                if submission.id == submission_id:
                    submissions[index] = submission.model_copy(update={"status": ContactStatus(status)})
                    found = True
            if not found:
                logger.warning(f"Local contact submission {submission_id} not found")
                return False

            self._save_submissions(submissions)
            return True

        except Exception as e:
            logger.error(f"Failed to update local contact submission {submission_id}: {e}")
            return False

    def delete_submission(self, submission_id: str) -> bool:
        try:
            self._save_submissions([s for s in self._load_submissions() if s.id != submission_id])
            return True
        except Exception as e:
            logger.error(f"Failed to delete local contact submission {submission_id}: {e}")
            return False
