"""
Application database model.

One row per (job, applicant) pair. Tracks the hiring lifecycle plus two
append-only JSON logs: employer notes and the status history.
"""

import enum
import uuid
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.types import JSONType, enum_values, utcnow


class ApplicationStatus(str, enum.Enum):
    """
    Application lifecycle:

    PENDING -> REVIEWING -> SHORTLISTED -> INTERVIEWED -> OFFERED | REJECTED
       \\___________ any non-terminal state ___________/ -> WITHDRAWN
    """
    PENDING = "pending"
    REVIEWING = "reviewing"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    OFFERED = "offered"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Application(Base):
    __tablename__ = "applications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    applicant_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Resume URL copied from the applicant's profile at apply time
    resume = Column(String, nullable=False)
    cover_letter = Column(String(2000), nullable=True)

    status = Column(
        Enum(ApplicationStatus, name="applicationstatus", values_callable=enum_values),
        default=ApplicationStatus.PENDING,
        nullable=False,
    )
    answers = Column(JSONType, default=list, nullable=False)
    # [{text, addedBy, createdAt}]
    notes = Column(JSONType, default=list, nullable=False)
    # [{status, changedBy, comment, changedAt}]
    status_history = Column(JSONType, default=list, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")

    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),
        Index("ix_applications_job_status", "job_id", "status"),
        Index("ix_applications_applicant_created_at", "applicant_id", "created_at"),
    )

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, status={self.status.value})>"
