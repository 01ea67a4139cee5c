"""
User model for authentication and role-based access.

A user is either a job seeker (applies for jobs) or an employer (owns at most
one company and posts jobs). The password is only ever stored as a bcrypt hash.
"""

import enum
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Integer, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.types import JSONType, enum_values, utcnow


class UserRole(str, enum.Enum):
    JOBSEEKER = "jobseeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Authentication credentials
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, name="userrole", values_callable=enum_values),
        default=UserRole.JOBSEEKER,
        nullable=False,
    )

    # Profile
    name = Column(String(50), nullable=False)
    phone = Column(String(20), nullable=True)
    avatar = Column(String, default="", nullable=False)
    resume = Column(String, default="", nullable=False)
    skills = Column(JSONType, default=list, nullable=False)
    experience = Column(Integer, default=0, nullable=False)
    education = Column(JSONType, default=list, nullable=False)
    location = Column(JSONType, default=dict, nullable=False)
    bio = Column(String(500), nullable=True)

    # Loose reference: deleting a company nulls this instead of relying on a FK
    company_id = Column(Uuid, nullable=True)
    saved_jobs = Column(JSONType, default=list, nullable=False)

    # Account status
    is_email_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    posted_jobs = relationship("Job", back_populates="posted_by")
    applications = relationship("Application", back_populates="applicant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"
