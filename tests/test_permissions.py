"""
Unit tests for ownership checks.
"""

import logging
import uuid

import pytest

from app.core.exceptions import ForbiddenError
from app.core.permissions import (
    Principal,
    can_manage_application,
    can_manage_company,
    can_manage_job,
    can_view_application,
    can_withdraw_application,
    require_application_applicant,
    require_application_manager,
    require_company_owner,
    require_job_poster,
)
from app.models.application import Application
from app.models.company import Company
from app.models.job import Job
from app.models.user import UserRole

OWNER = Principal(id=uuid.uuid4(), role=UserRole.EMPLOYER)
STRANGER = Principal(id=uuid.uuid4(), role=UserRole.EMPLOYER)
APPLICANT = Principal(id=uuid.uuid4(), role=UserRole.JOBSEEKER)


@pytest.fixture
def resources():
    company = Company(id=uuid.uuid4(), owner_id=OWNER.id)
    job = Job(id=uuid.uuid4(), posted_by_id=OWNER.id, company_id=company.id)
    application = Application(id=uuid.uuid4(), job=job, applicant_id=APPLICANT.id)
    return company, job, application


def test_predicates(resources):
    company, job, application = resources

    assert can_manage_company(OWNER, company)
    assert not can_manage_company(STRANGER, company)
    assert can_manage_job(OWNER, job)
    assert not can_manage_job(STRANGER, job)
    assert can_manage_application(OWNER, application)
    assert not can_manage_application(APPLICANT, application)
    assert can_withdraw_application(APPLICANT, application)
    assert not can_withdraw_application(OWNER, application)


def test_view_application_is_applicant_or_poster(resources):
    _, _, application = resources

    assert can_view_application(OWNER, application)
    assert can_view_application(APPLICANT, application)
    assert not can_view_application(STRANGER, application)


def test_principal_is_immutable():
    with pytest.raises(AttributeError):
        OWNER.id = uuid.uuid4()


def test_require_raises_forbidden_with_action(resources):
    company, job, application = resources

    with pytest.raises(ForbiddenError, match="Not authorized to delete this company"):
        require_company_owner(STRANGER, company, "delete")
    with pytest.raises(ForbiddenError, match="Not authorized to update this job"):
        require_job_poster(STRANGER, job)
    with pytest.raises(ForbiddenError, match="Not authorized to add notes to this application"):
        require_application_manager(STRANGER, application, "add notes to")
    with pytest.raises(ForbiddenError, match="Not authorized to withdraw this application"):
        require_application_applicant(OWNER, application)


def test_require_passes_for_owner(resources):
    company, job, application = resources

    require_company_owner(OWNER, company)
    require_job_poster(OWNER, job, "delete")
    require_application_manager(OWNER, application)
    require_application_applicant(APPLICANT, application)


def test_denial_is_logged(resources, caplog):
    company, _, _ = resources

    with caplog.at_level(logging.WARNING, logger="app.core.permissions"):
        with pytest.raises(ForbiddenError):
            require_company_owner(STRANGER, company)

    assert str(STRANGER.id) in caplog.text
    assert str(company.id) in caplog.text
