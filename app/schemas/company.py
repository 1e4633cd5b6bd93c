"""
Pydantic schemas for Company API requests/responses.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from app.schemas.base import INT4_MAX, CamelModel, CamelRequest
from app.schemas.job import JobSummaryResponse


class CompanyCreateRequest(CamelRequest):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=INT4_MAX)
    logo_url: Optional[str] = Field(None, max_length=2048)


class CompanyUpdateRequest(CamelRequest):
    """
    Schema for a partial company update.

    Only supplied fields are changed; the handle cannot be changed.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=INT4_MAX)
    logo_url: Optional[str] = Field(None, max_length=2048)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class CompanyFilters(CamelRequest):
    """Query-string filters for listing companies"""
    name: Optional[str] = Field(None, min_length=1)
    min_employees: Optional[int] = Field(None, ge=0, le=INT4_MAX)
    max_employees: Optional[int] = Field(None, ge=0, le=INT4_MAX)

    def to_filters(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with its jobs"""
    jobs: List[JobSummaryResponse] = []


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListResponse(CamelModel):
    companies: List[CompanyResponse]
