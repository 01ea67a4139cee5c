"""
Pydantic schemas for Application API requests/responses.
"""

from datetime import datetime
from typing import Any, List, Optional
from pydantic import Field, UUID4
from app.models.application import ApplicationStatus
from app.schemas.common import CamelModel
from app.schemas.company import CompanySummary
from app.schemas.job import JobResponse
from app.schemas.user import ApplicantSummary


class ApplicationCreateRequest(CamelModel):
    job_id: UUID4
    cover_letter: Optional[str] = Field(None, max_length=2000)
    answers: List[Any] = []


class StatusUpdateRequest(CamelModel):
    status: ApplicationStatus
    comment: Optional[str] = Field(None, max_length=1000)


class NoteCreateRequest(CamelModel):
    text: str = Field(..., min_length=1, max_length=2000)


class StatusHistoryEntry(CamelModel):
    status: ApplicationStatus
    changed_by: Optional[UUID4] = None
    comment: Optional[str] = None
    changed_at: datetime


class Note(CamelModel):
    text: str
    added_by: UUID4
    created_at: datetime


class ApplicationResponse(CamelModel):
    id: UUID4
    job_id: UUID4
    applicant_id: UUID4
    resume: str
    cover_letter: Optional[str] = None
    status: ApplicationStatus
    answers: List[Any] = []
    notes: List[Note] = []
    status_history: List[StatusHistoryEntry] = []
    created_at: datetime
    updated_at: datetime


class ApplicationJob(JobResponse):
    company: Optional[CompanySummary] = None


class MyApplication(ApplicationResponse):
    """Applicant's view: the job they applied to, with company name/logo."""
    job: Optional[ApplicationJob] = None


class JobApplication(ApplicationResponse):
    """Employer's view: who applied."""
    applicant: Optional[ApplicantSummary] = None


class ApplicationDetail(ApplicationResponse):
    job: Optional[JobResponse] = None
    applicant: Optional[ApplicantSummary] = None
