"""
CRUD operations for User model.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from app.core.security import get_password_hash
from app.models.job import Job
from app.models.user import User
from app.schemas.user import ProfileUpdateRequest, UserRegisterRequest


def get_by_id(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create(db: Session, data: UserRegisterRequest) -> User:
    """
    Create a new user with a hashed password.

    Args:
        db: Database session
        data: Validated registration data

    Returns:
        Created User instance
    """
    user = User(
        name=data.name,
        email=data.email.lower(),
        hashed_password=get_password_hash(data.password),
        role=data.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, data: ProfileUpdateRequest) -> User:
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def update_password(db: Session, user: User, new_password: str) -> User:
    user.hashed_password = get_password_hash(new_password)
    db.commit()
    db.refresh(user)
    return user


def set_file(db: Session, user: User, field: str, url: str) -> Optional[str]:
    """
    Point `avatar` or `resume` at a newly uploaded file.

    Returns:
        The URL it replaced (empty values become None)
    """
    previous = getattr(user, field) or None
    setattr(user, field, url)
    db.commit()
    db.refresh(user)
    return previous


def list_saved_jobs(db: Session, user: User) -> List[Job]:
    """Saved jobs that still exist, newest first."""
    ids = [UUID(job_id) for job_id in user.saved_jobs or []]
    if not ids:
        return []
    return (
        db.query(Job)
        .filter(Job.id.in_(ids))
        .options(joinedload(Job.company), joinedload(Job.posted_by))
        .order_by(Job.created_at.desc())
        .all()
    )


def save_job(db: Session, user: User, job_id: UUID) -> User:
    """Add a job id to the saved set (no-op if already saved)."""
    saved = list(user.saved_jobs or [])
    if str(job_id) not in saved:
        user.saved_jobs = [*saved, str(job_id)]
        db.commit()
        db.refresh(user)
    return user


def unsave_job(db: Session, user: User, job_id: UUID) -> User:
    saved = list(user.saved_jobs or [])
    if str(job_id) in saved:
        user.saved_jobs = [j for j in saved if j != str(job_id)]
        db.commit()
        db.refresh(user)
    return user
