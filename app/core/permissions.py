"""
Ownership checks applied before every mutation.

Mirrors the can_*/require_* split: `can_*` predicates are pure, `require_*`
raises ForbiddenError. Callers must resolve the resource first (NotFoundError
wins over ForbiddenError).
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.core.exceptions import ForbiddenError
from app.models.application import Application
from app.models.company import Company
from app.models.job import Job
from app.models.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, passed explicitly into every service call."""
    id: UUID
    role: UserRole


def can_manage_company(principal: Principal, company: Company) -> bool:
    return company.owner_id == principal.id


def can_manage_job(principal: Principal, job: Job) -> bool:
    return job.posted_by_id == principal.id


def can_manage_application(principal: Principal, application: Application) -> bool:
    """Employer side: the caller posted the job the application targets."""
    return application.job.posted_by_id == principal.id


def can_withdraw_application(principal: Principal, application: Application) -> bool:
    return application.applicant_id == principal.id


def can_view_application(principal: Principal, application: Application) -> bool:
    return can_withdraw_application(principal, application) or can_manage_application(principal, application)


def _deny(principal: Principal, message: str, resource_id) -> None:
    logger.warning(f"Forbidden: user {principal.id} ({principal.role.value}) on {resource_id}: {message}")
    raise ForbiddenError(message)


def require_company_owner(principal: Principal, company: Company, action: str = "update") -> None:
    if not can_manage_company(principal, company):
        _deny(principal, f"Not authorized to {action} this company", company.id)


def require_job_poster(principal: Principal, job: Job, action: str = "update") -> None:
    if not can_manage_job(principal, job):
        _deny(principal, f"Not authorized to {action} this job", job.id)


def require_application_manager(principal: Principal, application: Application, action: str = "update") -> None:
    if not can_manage_application(principal, application):
        _deny(principal, f"Not authorized to {action} this application", application.id)


def require_application_applicant(principal: Principal, application: Application, action: str = "withdraw") -> None:
    if not can_withdraw_application(principal, application):
        _deny(principal, f"Not authorized to {action} this application", application.id)


def require_application_viewer(principal: Principal, application: Application) -> None:
    if not can_view_application(principal, application):
        _deny(principal, "Not authorized to view this application", application.id)
