"""
Pydantic schemas for User authentication, registration and profile.
"""

from pydantic import EmailStr, Field, UUID4, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime
from app.models.user import UserRole
from app.schemas.common import CamelModel, PartialUpdate


class UserRegisterRequest(CamelModel):
    """Request schema for user registration."""
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=6,
        max_length=72,  # bcrypt limit
        description="Password must be 6-72 characters"
    )
    role: UserRole = UserRole.JOBSEEKER

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v

    @field_validator('role')
    @classmethod
    def public_roles_only(cls, v: UserRole) -> UserRole:
        """Admins are provisioned out of band, never through registration."""
        if v == UserRole.ADMIN:
            raise ValueError('Invalid role')
        return v


class UserLoginRequest(CamelModel):
    email: EmailStr
    password: str


class PasswordUpdateRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=72)


class ProfileUpdateRequest(PartialUpdate):
    """Editable profile fields. Role, email, company and uploads are not editable here."""
    nullable_fields = frozenset({"phone", "bio"})

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    skills: Optional[List[str]] = None
    experience: Optional[int] = Field(None, ge=0)
    education: Optional[List[Dict[str, Any]]] = None
    location: Optional[Dict[str, Any]] = None
    bio: Optional[str] = Field(None, max_length=500)


class UserResponse(CamelModel):
    """User profile response (no password hash)."""
    id: UUID4
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    avatar: str = ""
    resume: str = ""
    skills: List[str] = []
    experience: int = 0
    education: List[Dict[str, Any]] = []
    location: Dict[str, Any] = {}
    bio: Optional[str] = None
    company_id: Optional[UUID4] = None
    saved_jobs: List[UUID4] = []
    is_email_verified: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    """Poster summary embedded in job listings."""
    name: str
    email: str


class ApplicantSummary(CamelModel):
    """Applicant details an employer sees on an application."""
    id: UUID4
    name: str
    email: str
    phone: Optional[str] = None
    skills: List[str] = []
    experience: int = 0
    location: Dict[str, Any] = {}
    avatar: str = ""


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    data: UserResponse
