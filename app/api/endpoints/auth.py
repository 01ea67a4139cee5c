"""
Authentication and profile endpoints.

- POST /register: Create new account (job seeker or employer)
- POST /login: Authenticate and receive a JWT
- GET /me: Current user profile
- PUT /profile, PUT /password: Profile and password changes
- POST /avatar, POST /resume: File uploads via the storage provider
- /saved-jobs: Bookmark jobs
"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user
from app.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError, UnauthenticatedError
from app.core.security import create_user_token, verify_password
from app.core.storage import StorageBackend, get_storage
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.common import Envelope, ListEnvelope
from app.schemas.job import JobListItem
from app.schemas.user import (
    AuthResponse,
    PasswordUpdateRequest,
    ProfileUpdateRequest,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)
from app.services.uploads import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, discard_replaced, store_upload

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account and return a token for immediate login.
    """
    if user_crud.get_by_email(db, request.email):
        raise InvalidStateError("Email already registered")

    user = user_crud.create(db, request)
    logger.info(f"New user registered: {user.email} ({user.role.value}, id={user.id})")

    return {"success": True, "token": create_user_token(user), "data": user}


@router.post("/login", response_model=AuthResponse)
def login(request: UserLoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate user and return a JWT carrying {sub, role}.
    """
    user = user_crud.get_by_email(db, request.email)
    if not user or not verify_password(request.password, user.hashed_password):
        raise UnauthenticatedError("Invalid credentials")

    if not user.is_active:
        raise ForbiddenError("Account is inactive. Please contact support.")

    logger.info(f"User logged in: {user.email}")
    return {"success": True, "token": create_user_token(user), "data": user}


@router.get("/me", response_model=Envelope[UserResponse])
def get_me(user: User = Depends(get_current_user)):
    return {"success": True, "data": user}


@router.put("/profile", response_model=Envelope[UserResponse])
def update_profile(
    request: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user = user_crud.update_profile(db, user, request)
    logger.info(f"Profile updated for user {user.id}")
    return {"success": True, "message": "Profile updated successfully", "data": user}


@router.put("/password", response_model=AuthResponse)
def update_password(
    request: PasswordUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not verify_password(request.current_password, user.hashed_password):
        raise UnauthenticatedError("Current password is incorrect")

    user = user_crud.update_password(db, user, request.new_password)
    logger.info(f"Password changed for user {user.id}")
    return {"success": True, "token": create_user_token(user), "data": user}


@router.post("/avatar", response_model=Envelope[UserResponse])
def upload_avatar(
    avatar: UploadFile = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage)
):
    url = store_upload(storage, avatar, "avatars", IMAGE_EXTENSIONS)
    discard_replaced(storage, user_crud.set_file(db, user, "avatar", url))
    return {"success": True, "message": "Avatar uploaded successfully", "data": user}


@router.post("/resume", response_model=Envelope[UserResponse])
def upload_resume(
    resume: UploadFile = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage)
):
    """
    Upload the resume attached to future applications. Existing
    applications keep the resume they were submitted with.
    """
    url = store_upload(storage, resume, "resumes", DOCUMENT_EXTENSIONS)
    user_crud.set_file(db, user, "resume", url)
    return {"success": True, "message": "Resume uploaded successfully", "data": user}


@router.get("/saved-jobs", response_model=ListEnvelope[list[JobListItem]])
def get_saved_jobs(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    jobs = user_crud.list_saved_jobs(db, user)
    return {"success": True, "count": len(jobs), "data": jobs}


@router.post("/saved-jobs/{job_id}", response_model=Envelope[UserResponse])
def save_job(job_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not job_crud.get_by_id(db, job_id):
        raise NotFoundError("Job")
    user = user_crud.save_job(db, user, job_id)
    return {"success": True, "message": "Job saved", "data": user}


@router.delete("/saved-jobs/{job_id}", response_model=Envelope[UserResponse])
def unsave_job(job_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user = user_crud.unsave_job(db, user, job_id)
    return {"success": True, "message": "Job removed from saved jobs", "data": user}
