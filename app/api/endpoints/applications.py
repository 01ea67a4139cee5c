"""
Job application endpoints.

Job seekers apply, list their own applications and withdraw; the employer
who posted the job reviews applicants, moves them through the pipeline and
leaves notes. State changes are delegated to app.services.application_workflow.
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import get_current_principal, require_employer, require_jobseeker
from app.core.exceptions import NotFoundError
from app.core.pagination import PageRequest
from app.core.permissions import Principal, require_application_viewer, require_job_poster
from app.crud import application as application_crud
from app.crud import job as job_crud
from app.models.application import ApplicationStatus
from app.schemas.application import (
    ApplicationCreateRequest,
    ApplicationDetail,
    ApplicationResponse,
    JobApplication,
    MyApplication,
    NoteCreateRequest,
    StatusUpdateRequest,
)
from app.schemas.common import Envelope, ListEnvelope, PaginatedEnvelope
from app.services import application_workflow

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[ApplicationResponse])
def apply_for_job(
    request: ApplicationCreateRequest,
    principal: Principal = Depends(require_jobseeker),
    db: Session = Depends(get_db)
):
    application = application_workflow.apply_for_job(
        db,
        principal,
        request.job_id,
        cover_letter=request.cover_letter,
        answers=request.answers,
    )
    return {"success": True, "message": "Application submitted successfully", "data": application}


@router.get("", response_model=ListEnvelope[list[MyApplication]])
def get_my_applications(
    principal: Principal = Depends(require_jobseeker),
    db: Session = Depends(get_db)
):
    applications = application_crud.list_for_applicant(db, principal.id)
    return {"success": True, "count": len(applications), "data": applications}


@router.get("/job/{job_id}", response_model=PaginatedEnvelope[list[JobApplication]])
def get_job_applications(
    job_id: UUID,
    application_status: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """
    Applicants for one of the caller's jobs, newest first, optionally
    narrowed to a single status.
    """
    job = job_crud.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job")
    require_job_poster(principal, job, "view applications for")

    result = application_crud.list_for_job(
        db,
        job_id,
        PageRequest(page=page, limit=min(limit, settings.MAX_PAGE_SIZE)),
        status=application_status,
    )
    return result.envelope(result.items)


@router.get("/{application_id}", response_model=Envelope[ApplicationDetail])
def get_application(
    application_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    application = application_crud.get_detail(db, application_id)
    if not application:
        raise NotFoundError("Application")
    require_application_viewer(principal, application)
    return {"success": True, "data": application}


@router.put("/{application_id}/status", response_model=Envelope[ApplicationResponse])
def update_application_status(
    application_id: UUID,
    request: StatusUpdateRequest,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    application = application_workflow.update_status(
        db, principal, application_id, request.status, request.comment
    )
    return {"success": True, "message": "Application status updated", "data": application}


@router.put("/{application_id}/withdraw", response_model=Envelope[ApplicationResponse])
def withdraw_application(
    application_id: UUID,
    principal: Principal = Depends(require_jobseeker),
    db: Session = Depends(get_db)
):
    application = application_workflow.withdraw(db, principal, application_id)
    return {"success": True, "message": "Application withdrawn", "data": application}


@router.post("/{application_id}/notes", response_model=Envelope[ApplicationResponse])
def add_note(
    application_id: UUID,
    request: NoteCreateRequest,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    application = application_workflow.add_note(db, principal, application_id, request.text)
    return {"success": True, "message": "Note added", "data": application}
