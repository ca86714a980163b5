from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ApplicationStatus = Literal["new", "reviewed", "interview", "rejected", "hired"]

APPLICATION_STATUSES: tuple[str, ...] = ("new", "reviewed", "interview", "rejected", "hired")


class JobPostCreateRequest(BaseModel):
    job_title: str = Field(min_length=2, max_length=200)
    company_name: str = Field(min_length=1, max_length=200)
    location: str = Field(default="", max_length=200)
    contract_type: str = Field(min_length=1, max_length=50)
    sector: str | None = Field(default=None, max_length=200)
    salary_range: str | None = Field(default=None, max_length=200)
    ad_content: str = Field(min_length=1, max_length=50000)
    ad_channel: str = Field(default="Jobboard", max_length=50)


class JobPost(BaseModel):
    id: str
    created_at: datetime
    job_title: str
    company_name: str
    location: str
    contract_type: str
    sector: str | None = None
    salary_range: str | None = None
    ad_content: str
    ad_channel: str
    views_count: int = 0
    is_active: bool = True
    slug: str


class JobPostPublishResponse(JobPost):
    public_url: str


class Application(BaseModel):
    id: str
    created_at: datetime
    job_post_id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    message: str | None = None
    cv_url: str | None = None
    cv_filename: str | None = None
    status: ApplicationStatus = "new"


class ApplicationWithJob(Application):
    job_post: JobPost | None = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class JobApplicationCount(BaseModel):
    job_post_id: str
    job_title: str
    total: int
    new: int


class DashboardSummary(BaseModel):
    total_jobs: int
    total_applications: int
    new_applications: int
    by_status: dict[str, int] = Field(default_factory=dict)
    by_job: list[JobApplicationCount] = Field(default_factory=list)
