from pydantic import Field, UUID4, model_validator
from typing import List, Optional
from datetime import datetime
from app.models.job import ExperienceLevel, JobCategory, JobStatus, JobType
from app.schemas.common import CamelModel, PartialUpdate
from app.schemas.company import CompanyPublic, CompanyResponse, CompanySummary
from app.schemas.user import UserSummary


class JobLocation(CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    remote: bool = False


class Salary(CamelModel):
    min: int = Field(0, ge=0)
    max: int = Field(0, ge=0)
    currency: str = "USD"
    period: str = "yearly"

    @model_validator(mode="after")
    def check_range(self):
        if self.max and self.min > self.max:
            raise ValueError("Minimum salary cannot exceed maximum salary")
        return self


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=5000)
    location: JobLocation = JobLocation()
    job_type: JobType
    experience_level: ExperienceLevel
    salary: Salary = Salary()
    skills: List[str] = []
    requirements: List[str] = []
    responsibilities: List[str] = []
    benefits: List[str] = []
    category: JobCategory
    openings: int = Field(1, ge=1)
    application_deadline: Optional[datetime] = None
    status: JobStatus = JobStatus.ACTIVE


class JobUpdateRequest(PartialUpdate):
    """Partial update; ownership and counters are not client-editable."""
    nullable_fields = frozenset({"application_deadline"})

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    location: Optional[JobLocation] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    salary: Optional[Salary] = None
    skills: Optional[List[str]] = None
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    category: Optional[JobCategory] = None
    openings: Optional[int] = Field(None, ge=1)
    application_deadline: Optional[datetime] = None
    status: Optional[JobStatus] = None


class JobResponse(CamelModel):
    """Schema for job response"""
    id: UUID4
    title: str
    description: str
    company_id: UUID4
    posted_by_id: UUID4
    location: JobLocation
    job_type: JobType
    experience_level: ExperienceLevel
    salary: Salary
    skills: List[str]
    requirements: List[str]
    responsibilities: List[str]
    benefits: List[str]
    category: JobCategory
    openings: int
    application_deadline: Optional[datetime] = None
    status: JobStatus
    applications_count: int
    views: int
    created_at: datetime
    updated_at: datetime


class JobListItem(JobResponse):
    """Listing row with company and poster summaries."""
    company: Optional[CompanySummary] = None
    posted_by: Optional[UserSummary] = None


class JobDetail(JobResponse):
    company: Optional[CompanyPublic] = None
    posted_by: Optional[UserSummary] = None


class CompanyWithJobs(CompanyResponse):
    """Company detail with its postings, newest first."""
    jobs: List[JobResponse] = []


class JobStats(CamelModel):
    views: int
    applications: int
    openings: int
    days_active: int


class JobSearchParams(CamelModel):
    """Flat, all-optional filters accepted by the public job listing."""
    search: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    category: Optional[JobCategory] = None
    min_salary: Optional[int] = Field(None, ge=0)
    max_salary: Optional[int] = Field(None, ge=0)
    remote: Optional[bool] = None
    sort: str = "-createdAt"
