"""
CRUD operations for Company model.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from app.core.exceptions import ValidationError
from app.core.pagination import Page, PageRequest, paginate
from app.models.company import Company, CompanySize
from app.models.user import User
from app.schemas.company import CompanyCreateRequest, CompanyUpdateRequest


def get_by_id(db: Session, company_id: UUID, with_jobs: bool = False) -> Optional[Company]:
    query = db.query(Company).filter(Company.id == company_id)
    if with_jobs:
        query = query.options(selectinload(Company.jobs))
    return query.first()


def get_multi(
    db: Session,
    page: PageRequest,
    search: Optional[str] = None,
    industry: Optional[str] = None,
    company_size: Optional[CompanySize] = None,
) -> Page:
    """
    Public company directory, newest first.

    Args:
        search: Case-insensitive match on name or description
        industry: Exact industry
        company_size: Exact size bucket
    """
    query = db.query(Company)

    if search:
        query = query.filter(or_(
            Company.name.icontains(search, autoescape=True),
            Company.description.icontains(search, autoescape=True),
        ))
    if industry:
        query = query.filter(Company.industry == industry)
    if company_size:
        query = query.filter(Company.company_size == company_size)

    return paginate(query.order_by(Company.created_at.desc(), Company.id.asc()), page)


def _duplicate_name() -> ValidationError:
    return ValidationError("A company with this name already exists")


def _name_taken(db: Session, name: str, exclude_id: Optional[UUID] = None) -> bool:
    query = db.query(Company.id).filter(Company.name == name)
    if exclude_id is not None:
        query = query.filter(Company.id != exclude_id)
    return db.query(query.exists()).scalar()


def _check_conflict(db: Session, name: str, company_id: Optional[UUID] = None) -> None:
    """
    Called after a failed commit has been rolled back: a concurrent insert of
    the same name is reported as a duplicate, anything else propagates.
    """
    if _name_taken(db, name, company_id):
        raise _duplicate_name()


def create(db: Session, owner: User, data: CompanyCreateRequest) -> Company:
    """
    Create a company owned by `owner` and link it back on the owner's profile
    in the same transaction.
    """
    if _name_taken(db, data.name):
        raise _duplicate_name()

    company = Company(owner_id=owner.id, **data.model_dump(mode="json"))
    db.add(company)
    try:
        db.flush()
        owner.company_id = company.id
        db.commit()
    except IntegrityError:
        db.rollback()
        _check_conflict(db, data.name)
        raise
    db.refresh(company)
    return company


def update(db: Session, company: Company, data: CompanyUpdateRequest) -> Company:
    changes = data.model_dump(mode="json", exclude_unset=True)
    if "name" in changes and _name_taken(db, changes["name"], company.id):
        raise _duplicate_name()

    for key, value in changes.items():
        setattr(company, key, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        _check_conflict(db, changes.get("name", company.name), company.id)
        raise
    db.refresh(company)
    return company


def set_logo(db: Session, company: Company, url: str) -> Optional[str]:
    previous = company.logo or None
    company.logo = url
    db.commit()
    db.refresh(company)
    return previous


def delete(db: Session, company: Company) -> None:
    """
    Delete a company (its jobs and their applications go with it) and clear
    the owner's company reference.
    """
    db.query(User).filter(User.company_id == company.id).update(
        {User.company_id: None}, synchronize_session="fetch"
    )
    db.delete(company)
    db.commit()
