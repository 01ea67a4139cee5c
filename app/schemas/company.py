"""
Pydantic schemas for Company API requests/responses.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional
from pydantic import AfterValidator, Field, HttpUrl, UUID4
from app.models.company import CompanySize
from app.schemas.common import CamelModel, PartialUpdate


def _check_founded_year(v: Optional[int]) -> Optional[int]:
    if v is None:
        return v
    if v < 1800:
        raise ValueError("Founded year must be after 1800")
    if v > datetime.now(timezone.utc).year:
        raise ValueError("Founded year cannot be in the future")
    return v


FoundedYear = Annotated[Optional[int], AfterValidator(_check_founded_year)]


class CompanyCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    website: Optional[HttpUrl] = None
    industry: str = Field(..., min_length=1)
    company_size: CompanySize
    founded_year: FoundedYear = None
    location: Dict[str, Any] = {}
    social_links: Dict[str, Any] = {}
    benefits: List[str] = []
    culture: Optional[str] = Field(None, max_length=1000)


class CompanyUpdateRequest(PartialUpdate):
    nullable_fields = frozenset({"website", "founded_year", "culture"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    website: Optional[HttpUrl] = None
    industry: Optional[str] = Field(None, min_length=1)
    company_size: Optional[CompanySize] = None
    founded_year: FoundedYear = None
    location: Optional[Dict[str, Any]] = None
    social_links: Optional[Dict[str, Any]] = None
    benefits: Optional[List[str]] = None
    culture: Optional[str] = Field(None, max_length=1000)


class CompanyPublic(CamelModel):
    """Company as shown in the public directory (owner hidden)."""
    id: UUID4
    name: str
    description: str
    logo: str = ""
    website: Optional[str] = None
    industry: str
    company_size: CompanySize
    founded_year: Optional[int] = None
    location: Dict[str, Any] = {}
    social_links: Dict[str, Any] = {}
    benefits: List[str] = []
    culture: Optional[str] = None
    is_verified: bool
    rating: float
    reviews_count: int
    created_at: datetime
    updated_at: datetime


class CompanyResponse(CompanyPublic):
    owner_id: UUID4


class CompanySummary(CamelModel):
    """Company summary embedded in job listings."""
    id: UUID4
    name: str
    logo: str = ""
    location: Dict[str, Any] = {}
