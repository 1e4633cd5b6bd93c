from decimal import Decimal
from typing import List, Optional
from pydantic import Field, field_validator

from app.schemas.base import INT4_MAX, CamelModel, CamelRequest


class JobCreateRequest(CamelRequest):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0, le=INT4_MAX)
    equity: Optional[Decimal] = Field(None, ge=0, le=1, description="Fraction of the company, 0 to 1")
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(CamelRequest):
    """
    Schema for a partial job update.

    The id and the owning company cannot be changed.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0, le=INT4_MAX)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return v


class JobFilters(CamelRequest):
    """Query-string filters for listing jobs"""
    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0, le=INT4_MAX)
    has_equity: Optional[bool] = None

    def to_filters(self) -> dict:
        filters = self.model_dump(by_alias=True, exclude_none=True)
        # hasEquity=false means "don't care", not "no equity"
        if not filters.get("hasEquity"):
            filters.pop("hasEquity", None)
        return filters


class JobSummaryResponse(CamelModel):
    """Job fields without the owning company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_text(cls, v):
        """NUMERIC comes back as Decimal (Postgres) or float (SQLite); expose it as text."""
        if v is None:
            return None
        return str(v if isinstance(v, Decimal) else Decimal(str(v)))


class JobResponse(JobSummaryResponse):
    """Schema for job response"""
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListResponse(CamelModel):
    jobs: List[JobResponse]
