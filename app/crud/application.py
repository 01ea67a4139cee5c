"""
Read-side operations for Application model.

Writes go through app.services.application_workflow so status history and
the job counters stay consistent.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from app.core.pagination import Page, PageRequest, paginate
from app.models.application import Application, ApplicationStatus
from app.models.job import Job


def get_by_id(db: Session, application_id: UUID) -> Optional[Application]:
    return db.query(Application).filter(Application.id == application_id).first()


def get_detail(db: Session, application_id: UUID) -> Optional[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job), joinedload(Application.applicant))
        .filter(Application.id == application_id)
        .first()
    )


def get_by_job_and_applicant(db: Session, job_id: UUID, applicant_id: UUID) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first()
    )


def list_for_applicant(db: Session, applicant_id: UUID) -> List[Application]:
    """Caller's own applications with job and company, newest first."""
    return (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(Job.company))
        .filter(Application.applicant_id == applicant_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def list_for_job(
    db: Session,
    job_id: UUID,
    page: PageRequest,
    status: Optional[ApplicationStatus] = None,
) -> Page:
    query = (
        db.query(Application)
        .options(joinedload(Application.applicant))
        .filter(Application.job_id == job_id)
    )
    if status:
        query = query.filter(Application.status == status)

    return paginate(query.order_by(Application.created_at.desc(), Application.id.asc()), page)


def count_for_job(db: Session, job_id: UUID, exclude_withdrawn: bool = True) -> int:
    """Authoritative count backing Job.applications_count."""
    query = db.query(Application).filter(Application.job_id == job_id)
    if exclude_withdrawn:
        query = query.filter(Application.status != ApplicationStatus.WITHDRAWN)
    return query.count()
