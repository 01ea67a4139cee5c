import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import require_employer
from app.core.exceptions import NotFoundError, ValidationError
from app.core.pagination import PageRequest
from app.core.permissions import Principal, require_company_owner, require_job_poster
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models.job import ExperienceLevel, JobCategory, JobType
from app.schemas.common import Envelope, ListEnvelope, MessageResponse, PaginatedEnvelope
from app.schemas.job import (
    JobCreateRequest,
    JobDetail,
    JobListItem,
    JobResponse,
    JobSearchParams,
    JobStats,
    JobUpdateRequest,
)
from app.services.job_query import search_jobs

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def _get_job(db: Session, job_id: UUID):
    job = job_crud.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job")
    return job


@router.get("", response_model=PaginatedEnvelope[list[JobListItem]])
def list_jobs(
    search: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    experience_level: Optional[ExperienceLevel] = Query(None, alias="experienceLevel"),
    category: Optional[JobCategory] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    remote: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    sort: str = "-createdAt",
    db: Session = Depends(get_db)
):
    """
    Public listing of active jobs.

    Filters are AND-ed; `search` matches title or description and `location`
    matches city or country, case-insensitively. `sort` is a field name with
    an optional leading `-` for descending order.
    """
    params = JobSearchParams(
        search=search,
        location=location,
        job_type=job_type,
        experience_level=experience_level,
        category=category,
        min_salary=min_salary,
        max_salary=max_salary,
        remote=remote,
        sort=sort,
    )
    result = search_jobs(db, params, PageRequest(page=page, limit=min(limit, settings.MAX_PAGE_SIZE)))
    return result.envelope(result.items)


@router.get("/my/posted", response_model=ListEnvelope[list[JobResponse]])
def get_my_jobs(
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    jobs = job_crud.list_by_poster(db, principal.id)
    return {"success": True, "count": len(jobs), "data": jobs}


@router.get("/{job_id}", response_model=Envelope[JobDetail])
def get_job(job_id: UUID, db: Session = Depends(get_db)):
    """
    Job detail with company and poster. Every successful fetch counts as a view.
    """
    _get_job(db, job_id)
    job_crud.increment_views(db, job_id)
    return {"success": True, "data": job_crud.get_detail(db, job_id)}


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[JobResponse])
def create_job(
    request: JobCreateRequest,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """
    Post a job under the caller's company.
    """
    poster = user_crud.get_by_id(db, principal.id)
    company = company_crud.get_by_id(db, poster.company_id) if poster.company_id else None
    if not company:
        raise ValidationError("Please create a company profile first")
    require_company_owner(principal, company, "post jobs for")

    job = job_crud.create(db, poster, company, request)
    logger.info(f"Created job {job.id}: {job.title} (company {company.id}, poster {principal.id})")

    return {"success": True, "message": "Job created successfully", "data": job}


@router.put("/{job_id}", response_model=Envelope[JobResponse])
def update_job(
    job_id: UUID,
    request: JobUpdateRequest,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    job = _get_job(db, job_id)
    require_job_poster(principal, job, "update")

    job = job_crud.update(db, job, request)
    logger.info(f"Updated job {job.id} by {principal.id}")
    return {"success": True, "message": "Job updated successfully", "data": job}


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: UUID,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """
    Delete a job and all of its applications.
    """
    job = _get_job(db, job_id)
    require_job_poster(principal, job, "delete")

    job_crud.delete(db, job)
    logger.info(f"Deleted job {job_id} by {principal.id}")
    return {"success": True, "message": "Job deleted successfully"}


@router.get("/{job_id}/stats", response_model=Envelope[JobStats])
def get_job_stats(
    job_id: UUID,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    job = _get_job(db, job_id)
    require_job_poster(principal, job, "view stats for")
    return {"success": True, "data": job_crud.get_stats(job)}
