from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import FileResponse

from recrutpro.core.config import settings
from recrutpro.core.file_storage import FileStorage, get_file_storage
from recrutpro.core.job_board_store import JobBoardStore, get_job_board_store
from recrutpro.core.rate_limit import rate_limit
from recrutpro.core.security import require_admin
from recrutpro.schemas.jobs import (
    Application,
    ApplicationStatusUpdate,
    ApplicationWithJob,
    DashboardSummary,
    JobPost,
    JobPostCreateRequest,
    JobPostPublishResponse,
)
from recrutpro.services import job_board_service
from recrutpro.services.job_board_service import CVUpload, JobBoardError

router = APIRouter()
logger = logging.getLogger(__name__)

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _raise_job_board_error(exc: JobBoardError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


async def _read_upload(file: UploadFile) -> CVUpload:
    limit = settings.cv_max_bytes
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(1024 * 64)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise HTTPException(
                status_code=413,
                detail=f"Le fichier est trop volumineux (max {limit // (1024 * 1024)} Mo)",
            )
        chunks.append(chunk)
    return CVUpload(filename=file.filename or "cv", content=b"".join(chunks))


@router.post("/jobs", response_model=JobPostPublishResponse, status_code=status.HTTP_201_CREATED)
def publish_job(
    payload: JobPostCreateRequest,
    store: JobBoardStore = Depends(get_job_board_store),
    _: None = Depends(require_admin),
):
    job = job_board_service.publish_job_post(store, payload)
    return JobPostPublishResponse(
        **job.model_dump(),
        public_url=job_board_service.public_application_url(job.slug),
    )


@router.get("/jobs", response_model=list[JobPost])
def list_jobs(store: JobBoardStore = Depends(get_job_board_store), _: None = Depends(require_admin)):
    return job_board_service.list_job_posts(store)


@router.get("/jobs/{slug}", response_model=JobPost)
def get_public_job(slug: str, store: JobBoardStore = Depends(get_job_board_store)):
    try:
        return job_board_service.get_job_post_by_slug(store, slug)
    except JobBoardError as exc:
        _raise_job_board_error(exc)


@router.post("/jobs/{slug}/applications", response_model=Application, status_code=status.HTTP_201_CREATED)
@rate_limit(settings.application_rate_limit)
async def apply_to_job(
    request: Request,
    slug: str,
    first_name: str = Form(min_length=1, max_length=100),
    last_name: str = Form(min_length=1, max_length=100),
    email: str = Form(max_length=200, pattern=_EMAIL_PATTERN),
    phone: str | None = Form(default=None, max_length=40),
    message: str | None = Form(default=None, max_length=5000),
    cv_file: UploadFile | None = File(default=None),
    store: JobBoardStore = Depends(get_job_board_store),
    storage: FileStorage = Depends(get_file_storage),
):
    _ = request
    cv = await _read_upload(cv_file) if cv_file is not None and cv_file.filename else None
    try:
        return await asyncio.to_thread(
            job_board_service.submit_application,
            store,
            storage,
            slug=slug,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email.strip(),
            phone=phone,
            message=message,
            cv=cv,
        )
    except JobBoardError as exc:
        _raise_job_board_error(exc)


@router.get("/applications", response_model=list[ApplicationWithJob])
def list_applications(
    job_post_id: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=200),
    store: JobBoardStore = Depends(get_job_board_store),
    _: None = Depends(require_admin),
):
    try:
        return job_board_service.list_applications(
            store,
            job_post_id=job_post_id,
            status=status_filter,
            search=search,
        )
    except JobBoardError as exc:
        _raise_job_board_error(exc)


@router.get("/applications/summary", response_model=DashboardSummary)
def applications_summary(store: JobBoardStore = Depends(get_job_board_store), _: None = Depends(require_admin)):
    return job_board_service.dashboard_summary(store)


@router.patch("/applications/{application_id}/status", response_model=Application)
def update_application_status(
    application_id: str,
    payload: ApplicationStatusUpdate,
    store: JobBoardStore = Depends(get_job_board_store),
    _: None = Depends(require_admin),
):
    try:
        return job_board_service.update_application_status(store, application_id, payload.status)
    except JobBoardError as exc:
        _raise_job_board_error(exc)


@router.get("/files/{key:path}")
def download_file(key: str, storage: FileStorage = Depends(get_file_storage)):
    try:
        path = storage.resolve(key)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fichier introuvable.") from exc
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fichier introuvable.")
    return FileResponse(path, filename=path.name)
