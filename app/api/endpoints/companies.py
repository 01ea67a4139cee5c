"""
Company profile endpoints. An employer owns at most one company.
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import require_employer
from app.core.exceptions import InvalidStateError, NotFoundError
from app.core.pagination import PageRequest
from app.core.permissions import Principal, require_company_owner
from app.core.storage import StorageBackend, get_storage
from app.crud import company as company_crud
from app.crud import user as user_crud
from app.models.company import CompanySize
from app.schemas.common import Envelope, MessageResponse, PaginatedEnvelope
from app.schemas.company import CompanyCreateRequest, CompanyPublic, CompanyResponse, CompanyUpdateRequest
from app.schemas.job import CompanyWithJobs
from app.services.uploads import IMAGE_EXTENSIONS, discard_replaced, store_upload

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


def _get_company(db: Session, company_id: UUID, with_jobs: bool = False):
    company = company_crud.get_by_id(db, company_id, with_jobs=with_jobs)
    if not company:
        raise NotFoundError("Company")
    return company


@router.get("", response_model=PaginatedEnvelope[list[CompanyPublic]])
def list_companies(
    search: Optional[str] = None,
    industry: Optional[str] = None,
    company_size: Optional[CompanySize] = Query(None, alias="companySize"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    db: Session = Depends(get_db)
):
    result = company_crud.get_multi(
        db,
        PageRequest(page=page, limit=min(limit, settings.MAX_PAGE_SIZE)),
        search=search,
        industry=industry,
        company_size=company_size,
    )
    return result.envelope(result.items)


@router.get("/my/company", response_model=Envelope[CompanyWithJobs])
def get_my_company(
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    owner = user_crud.get_by_id(db, principal.id)
    if not owner.company_id:
        raise NotFoundError("Company")
    return {"success": True, "data": _get_company(db, owner.company_id, with_jobs=True)}


@router.get("/{company_id}", response_model=Envelope[CompanyWithJobs])
def get_company(company_id: UUID, db: Session = Depends(get_db)):
    return {"success": True, "data": _get_company(db, company_id, with_jobs=True)}


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[CompanyResponse])
def create_company(
    request: CompanyCreateRequest,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    owner = user_crud.get_by_id(db, principal.id)
    if owner.company_id:
        raise InvalidStateError("You already have a company profile")

    company = company_crud.create(db, owner, request)
    logger.info(f"Created company {company.id}: {company.name} (owner {principal.id})")
    return {"success": True, "message": "Company created successfully", "data": company}


@router.put("/{company_id}", response_model=Envelope[CompanyResponse])
def update_company(
    company_id: UUID,
    request: CompanyUpdateRequest,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    company = _get_company(db, company_id)
    require_company_owner(principal, company, "update")

    company = company_crud.update(db, company, request)
    logger.info(f"Updated company {company.id} by {principal.id}")
    return {"success": True, "message": "Company updated successfully", "data": company}


@router.delete("/{company_id}", response_model=MessageResponse)
def delete_company(
    company_id: UUID,
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """
    Delete the company with its jobs and their applications; the owner's
    companyId is cleared.
    """
    company = _get_company(db, company_id)
    require_company_owner(principal, company, "delete")

    company_crud.delete(db, company)
    logger.info(f"Deleted company {company_id} by {principal.id}")
    return {"success": True, "message": "Company deleted successfully"}


@router.post("/{company_id}/logo", response_model=Envelope[CompanyResponse])
def upload_logo(
    company_id: UUID,
    logo: UploadFile = File(None),
    principal: Principal = Depends(require_employer),
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage)
):
    company = _get_company(db, company_id)
    require_company_owner(principal, company, "update")

    url = store_upload(storage, logo, "logos", IMAGE_EXTENSIONS)
    discard_replaced(storage, company_crud.set_logo(db, company, url))
    logger.info(f"Logo uploaded for company {company.id}")
    return {"success": True, "message": "Logo uploaded successfully", "data": company}
