"""
Application lifecycle: apply, employer status changes, withdraw, notes.

All status changes go through `record_transition`, the only place that
writes `status` and appends to `status_history`. Counter adjustments on the
parent job are SQL increments committed in the same transaction as the
application write, so `applications_count` cannot drift on partial failure.

Transition policy (forward-only):
    pending < reviewing < shortlisted < interviewed < {offered, rejected}
A non-terminal application may move to any later status. `withdrawn` is only
reachable through withdraw(), from any non-terminal status. Terminal statuses
(offered, rejected, withdrawn) accept no further change.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, NotFoundError
from app.core.permissions import (
    Principal,
    require_application_applicant,
    require_application_manager,
)
from app.crud import application as application_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models.application import Application, ApplicationStatus
from app.models.job import Job, JobStatus

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({
    ApplicationStatus.OFFERED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.WITHDRAWN,
})

# Rank in the hiring pipeline; offered and rejected share the last rank.
_PIPELINE_RANK = {
    ApplicationStatus.PENDING: 0,
    ApplicationStatus.REVIEWING: 1,
    ApplicationStatus.SHORTLISTED: 2,
    ApplicationStatus.INTERVIEWED: 3,
    ApplicationStatus.OFFERED: 4,
    ApplicationStatus.REJECTED: 4,
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def is_terminal(status: ApplicationStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: ApplicationStatus, new: ApplicationStatus) -> bool:
    """Whether an employer status update from `current` to `new` is allowed."""
    if is_terminal(current) or new == ApplicationStatus.WITHDRAWN:
        return False
    return _PIPELINE_RANK[new] > _PIPELINE_RANK[current]


def record_transition(
    application: Application,
    status: ApplicationStatus,
    changed_by: UUID,
    comment: Optional[str] = None,
) -> None:
    """Set the status and append the matching audit entry. Does not commit."""
    application.status = status
    # Reassign instead of appending in place so the JSON column is flagged dirty
    application.status_history = [
        *(application.status_history or []),
        {
            "status": status.value,
            "changedBy": str(changed_by),
            "comment": comment,
            "changedAt": _now_iso(),
        },
    ]


def apply_for_job(
    db: Session,
    principal: Principal,
    job_id: UUID,
    cover_letter: Optional[str] = None,
    answers: Optional[List[Any]] = None,
) -> Application:
    """
    Create a pending application and bump the job's counter.

    Raises:
        NotFoundError: job does not exist
        InvalidStateError: job not active, already applied, or no resume on file
    """
    job = job_crud.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job")

    if job.status != JobStatus.ACTIVE:
        raise InvalidStateError("This job is no longer accepting applications")

    if application_crud.get_by_job_and_applicant(db, job_id, principal.id):
        raise InvalidStateError("You have already applied for this job")

    applicant = user_crud.get_by_id(db, principal.id)
    if not applicant or not applicant.resume:
        raise InvalidStateError("Please upload your resume before applying")

    application = Application(
        job_id=job_id,
        applicant_id=principal.id,
        resume=applicant.resume,
        cover_letter=cover_letter,
        answers=answers or [],
        notes=[],
        status_history=[],
    )
    record_transition(application, ApplicationStatus.PENDING, principal.id)
    db.add(application)

    try:
        db.flush()
        db.query(Job).filter(Job.id == job_id).update(
            {Job.applications_count: Job.applications_count + 1},
            synchronize_session=False,
        )
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent apply for the same (job, applicant)
        db.rollback()
        raise InvalidStateError("You have already applied for this job")

    db.refresh(application)
    logger.info(f"User {principal.id} applied for job {job_id} (application {application.id})")
    return application


def _get_application(db: Session, application_id: UUID) -> Application:
    application = application_crud.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application")
    return application


def update_status(
    db: Session,
    principal: Principal,
    application_id: UUID,
    status: ApplicationStatus,
    comment: Optional[str] = None,
) -> Application:
    """Employer moves an application forward in the pipeline."""
    application = _get_application(db, application_id)
    require_application_manager(principal, application, "update")

    if not can_transition(application.status, status):
        raise InvalidStateError(
            f"Cannot change application status from {application.status.value} to {status.value}"
        )

    previous = application.status
    record_transition(application, status, principal.id, comment)
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.id} status {previous.value} -> {status.value} by {principal.id}")
    return application


def withdraw(db: Session, principal: Principal, application_id: UUID) -> Application:
    """Applicant pulls out; the job's counter is decremented, floored at zero."""
    application = _get_application(db, application_id)
    require_application_applicant(principal, application, "withdraw")

    if is_terminal(application.status):
        raise InvalidStateError("Cannot withdraw application at this stage")

    record_transition(application, ApplicationStatus.WITHDRAWN, principal.id)
    db.query(Job).filter(Job.id == application.job_id, Job.applications_count > 0).update(
        {Job.applications_count: Job.applications_count - 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.id} withdrawn by {principal.id}")
    return application


def add_note(db: Session, principal: Principal, application_id: UUID, text: str) -> Application:
    """Employer annotation; leaves status and history untouched."""
    application = _get_application(db, application_id)
    require_application_manager(principal, application, "add notes to")

    application.notes = [
        *(application.notes or []),
        {"text": text, "addedBy": str(principal.id), "createdAt": _now_iso()},
    ]
    db.commit()
    db.refresh(application)

    logger.info(f"Note added to application {application.id} by {principal.id}")
    return application
