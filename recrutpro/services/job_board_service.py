from __future__ import annotations

import logging
import secrets
import string
import time
from collections import Counter
from dataclasses import dataclass

from recrutpro.core.config import settings
from recrutpro.core.file_storage import FileStorage
from recrutpro.core.job_board_store import JobBoardStore
from recrutpro.schemas.jobs import (
    APPLICATION_STATUSES,
    Application,
    ApplicationWithJob,
    DashboardSummary,
    JobApplicationCount,
    JobPost,
    JobPostCreateRequest,
)
from recrutpro.services.cv_file_security import safe_name_part, validate_cv_upload

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits
SLUG_LENGTH = 8


class JobBoardError(RuntimeError):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class CVUpload:
    filename: str
    content: bytes


def generate_slug() -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(SLUG_LENGTH))


def public_application_url(slug: str) -> str:
    return f"{settings.public_base_url}/postuler/{slug}"


def publish_job_post(store: JobBoardStore, payload: JobPostCreateRequest) -> JobPost:
    slug = generate_slug()
    while store.slug_exists(slug):
        slug = generate_slug()
    record = store.insert_job_post(payload.model_dump(), slug=slug)
    logger.info("job_post_published id=%s slug=%s channel=%s", record["id"], slug, record["ad_channel"])
    return JobPost(**record)


def get_job_post_by_slug(store: JobBoardStore, slug: str) -> JobPost:
    record = store.get_active_job_post_by_slug(slug)
    if not record:
        raise JobBoardError("Annonce introuvable ou désactivée.", status_code=404)
    store.increment_views(record["id"])
    record["views_count"] += 1
    return JobPost(**record)


def list_job_posts(store: JobBoardStore) -> list[JobPost]:
    return [JobPost(**record) for record in store.list_job_posts()]


def _store_cv(storage: FileStorage, job_post_id: str, first_name: str, last_name: str, cv: CVUpload) -> tuple[str | None, str | None]:
    try:
        ext = validate_cv_upload(filename=cv.filename, content=cv.content, max_bytes=settings.cv_max_bytes)
    except ValueError as exc:
        status_code = 413 if len(cv.content) > settings.cv_max_bytes else 400
        raise JobBoardError(str(exc), status_code=status_code) from exc

    key = (
        f"{job_post_id}/{int(time.time() * 1000)}_"
        f"{safe_name_part(first_name)}_{safe_name_part(last_name)}.{ext}"
    )
    try:
        storage.upload(key, cv.content)
    except OSError as exc:
        # The application is still recorded, only without its CV.
        logger.error("cv_upload_failed job_post_id=%s: %s", job_post_id, exc)
        return None, None
    return storage.public_url(key), cv.filename


def submit_application(
    store: JobBoardStore,
    storage: FileStorage,
    *,
    slug: str,
    first_name: str,
    last_name: str,
    email: str,
    phone: str | None = None,
    message: str | None = None,
    cv: CVUpload | None = None,
) -> Application:
    job = store.get_active_job_post_by_slug(slug)
    if not job:
        raise JobBoardError("Annonce introuvable ou désactivée.", status_code=404)

    cv_url: str | None = None
    cv_filename: str | None = None
    if cv is not None:
        cv_url, cv_filename = _store_cv(storage, job["id"], first_name, last_name, cv)

    record = store.insert_application(
        {
            "job_post_id": job["id"],
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "phone": phone,
            "message": message,
            "cv_url": cv_url,
            "cv_filename": cv_filename,
        }
    )
    logger.info("application_submitted id=%s job_post_id=%s has_cv=%s", record["id"], job["id"], bool(cv_url))
    return Application(**record)


def _matches_search(application: dict, term: str) -> bool:
    full_name = f"{application['first_name']} {application['last_name']}".lower()
    return term in full_name or term in application["email"].lower()


def list_applications(
    store: JobBoardStore,
    *,
    job_post_id: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> list[ApplicationWithJob]:
    if status == "all":
        status = None
    if status and status not in APPLICATION_STATUSES:
        raise JobBoardError(f"Statut inconnu : {status}")

    jobs = {job["id"]: JobPost(**job) for job in store.list_job_posts()}
    term = (search or "").strip().lower()
    results: list[ApplicationWithJob] = []
    for application in store.list_applications(job_post_id=job_post_id, status=status):
        if term and not _matches_search(application, term):
            continue
        results.append(ApplicationWithJob(**application, job_post=jobs.get(application["job_post_id"])))
    return results


def update_application_status(store: JobBoardStore, application_id: str, status: str) -> Application:
    if status not in APPLICATION_STATUSES:
        raise JobBoardError(f"Statut inconnu : {status}")
    if not store.update_application_status(application_id, status):
        raise JobBoardError("Candidature introuvable.", status_code=404)
    logger.info("application_status_updated id=%s status=%s", application_id, status)
    record = store.get_application(application_id)
    return Application(**record)


def dashboard_summary(store: JobBoardStore) -> DashboardSummary:
    jobs = store.list_job_posts()
    applications = store.list_applications()
    by_status = Counter(application["status"] for application in applications)
    totals = Counter(application["job_post_id"] for application in applications)
    new_counts = Counter(
        application["job_post_id"] for application in applications if application["status"] == "new"
    )
    return DashboardSummary(
        total_jobs=len(jobs),
        total_applications=len(applications),
        new_applications=by_status.get("new", 0),
        by_status={status: by_status.get(status, 0) for status in APPLICATION_STATUSES},
        by_job=[
            JobApplicationCount(
                job_post_id=job["id"],
                job_title=job["job_title"],
                total=totals.get(job["id"], 0),
                new=new_counts.get(job["id"], 0),
            )
            for job in jobs
        ],
    )
