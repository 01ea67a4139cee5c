import enum
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.types import JSONType, enum_values, utcnow


class JobStatus(str, enum.Enum):
    """
    Listing status of a job posting.

    - ACTIVE: Publicly listed and accepting applications
    - CLOSED: No longer accepting applications
    - DRAFT: Not yet published
    """
    ACTIVE = "active"
    CLOSED = "closed"
    DRAFT = "draft"


class JobType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    FREELANCE = "freelance"


class ExperienceLevel(str, enum.Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


class JobCategory(str, enum.Enum):
    SOFTWARE_DEVELOPMENT = "Software Development"
    DATA_SCIENCE = "Data Science"
    DESIGN = "Design"
    MARKETING = "Marketing"
    SALES = "Sales"
    HUMAN_RESOURCES = "Human Resources"
    FINANCE = "Finance"
    OPERATIONS = "Operations"
    CUSTOMER_SUPPORT = "Customer Support"
    PRODUCT_MANAGEMENT = "Product Management"
    OTHER = "Other"


def default_salary():
    return {"min": 0, "max": 0, "currency": "USD", "period": "yearly"}


class Job(Base):
    """
    Job posting published by an employer on behalf of their company.

    `applications_count` and `views` are denormalized counters; the
    applications table is the source of truth for the former.
    """
    __tablename__ = "jobs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)

    company_id = Column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    posted_by_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # {city, state, country, remote}
    location = Column(JSONType, default=dict, nullable=False)
    job_type = Column(Enum(JobType, name="jobtype", values_callable=enum_values), nullable=False)
    experience_level = Column(
        Enum(ExperienceLevel, name="experiencelevel", values_callable=enum_values), nullable=False
    )
    # {min, max, currency, period}
    salary = Column(JSONType, default=default_salary, nullable=False)
    skills = Column(JSONType, default=list, nullable=False)
    requirements = Column(JSONType, default=list, nullable=False)
    responsibilities = Column(JSONType, default=list, nullable=False)
    benefits = Column(JSONType, default=list, nullable=False)
    category = Column(Enum(JobCategory, name="jobcategory", values_callable=enum_values), nullable=False, index=True)
    openings = Column(Integer, default=1, nullable=False)
    application_deadline = Column(DateTime(timezone=True), nullable=True)

    status = Column(
        Enum(JobStatus, name="jobstatus", values_callable=enum_values),
        default=JobStatus.ACTIVE,
        nullable=False,
    )
    applications_count = Column(Integer, default=0, nullable=False)
    views = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="jobs")
    posted_by = relationship("User", back_populates="posted_jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_jobs_status_created_at", "status", "created_at"),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', status={self.status.value})>"
