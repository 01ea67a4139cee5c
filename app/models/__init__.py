"""
Database models package.
"""

from app.models.user import User, UserRole
from app.models.company import Company, CompanySize
from app.models.job import Job, JobStatus, JobType, ExperienceLevel, JobCategory
from app.models.application import Application, ApplicationStatus

__all__ = [
    "User", "UserRole",
    "Company", "CompanySize",
    "Job", "JobStatus", "JobType", "ExperienceLevel", "JobCategory",
    "Application", "ApplicationStatus",
]
