"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer. The public search
lives in app.services.job_query.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from app.models.company import Company
from app.models.job import Job
from app.models.user import User
from app.schemas.job import JobCreateRequest, JobStats, JobUpdateRequest


def get_by_id(db: Session, job_id: UUID) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def get_detail(db: Session, job_id: UUID) -> Optional[Job]:
    """Job with its company and poster loaded for the detail view."""
    return (
        db.query(Job)
        .options(joinedload(Job.company), joinedload(Job.posted_by))
        .filter(Job.id == job_id)
        .first()
    )


def create(db: Session, poster: User, company: Company, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        poster: Employer posting the job
        company: The poster's company
        job_data: Validated job creation data

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        company_id=company.id,
        posted_by_id=poster.id,
        applications_count=0,
        views=0,
        **job_data.model_dump(),
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def update(db: Session, job: Job, job_data: JobUpdateRequest) -> Job:
    """Apply the fields the client actually sent."""
    for key, value in job_data.model_dump(exclude_unset=True).items():
        setattr(job, key, value)

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job: Job) -> None:
    """Delete a job; its applications are removed with it."""
    db.delete(job)
    db.commit()


def list_by_poster(db: Session, poster_id: UUID) -> List[Job]:
    """Jobs posted by one employer, newest first."""
    return (
        db.query(Job)
        .options(joinedload(Job.company))
        .filter(Job.posted_by_id == poster_id)
        .order_by(Job.created_at.desc())
        .all()
    )


def increment_views(db: Session, job_id: UUID) -> None:
    """Count one view; every fetch counts, with no per-viewer dedup."""
    db.query(Job).filter(Job.id == job_id).update(
        {Job.views: Job.views + 1}, synchronize_session=False
    )
    db.commit()


def get_stats(job: Job) -> JobStats:
    created_at = job.created_at
    if created_at.tzinfo is None:
        # SQLite drops tzinfo; stored values are UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    days_active = (datetime.now(timezone.utc) - created_at).days

    return JobStats(
        views=job.views,
        applications=job.applications_count,
        openings=job.openings,
        days_active=days_active,
    )
