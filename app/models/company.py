import enum
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Integer, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.types import JSONType, enum_values, utcnow


class CompanySize(str, enum.Enum):
    XS = "1-10"
    S = "11-50"
    M = "51-200"
    L = "201-500"
    XL = "501-1000"
    XXL = "1000+"


class Company(Base):
    """
    Employer organisation. Owned by exactly one user (owner_id) and
    parent of the jobs that user posts.
    """
    __tablename__ = "companies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(2000), nullable=False)
    logo = Column(String, default="", nullable=False)
    website = Column(String, nullable=True)
    industry = Column(String, nullable=False, index=True)
    company_size = Column(Enum(CompanySize, name="companysize", values_callable=enum_values), nullable=False)
    founded_year = Column(Integer, nullable=True)
    location = Column(JSONType, default=dict, nullable=False)
    social_links = Column(JSONType, default=dict, nullable=False)
    benefits = Column(JSONType, default=list, nullable=False)
    culture = Column(String(1000), nullable=True)

    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    is_verified = Column(Boolean, default=False, nullable=False)
    rating = Column(Numeric(2, 1), default=0, nullable=False)
    reviews_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    owner = relationship("User")
    jobs = relationship(
        "Job",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="Job.created_at.desc()",
    )

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"
