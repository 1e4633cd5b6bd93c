import logging
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_principal
from app.core.errors import BadRequestError, format_validation_errors
from app.crud import company as company_crud
from app.schemas.auth import Principal
from app.schemas.base import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilters,
    CompanyListResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


def company_filters(request: Request) -> CompanyFilters:
    """Validate the query string; unknown or malformed keys are a 400."""
    try:
        return CompanyFilters.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(format_validation_errors(e.errors()))


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_principal)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    logger.info(f"{admin.username} created company {company['handle']}")
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    filters: CompanyFilters = Depends(company_filters),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Optional filters:
    - name: case-insensitive partial match
    - minEmployees / maxEmployees: inclusive bounds (min must not exceed max)

    Authorization required: none
    """
    return {"companies": company_crud.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.

    Authorization required: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_principal)
):
    """
    Partially update a company: any of name, description, numEmployees, logoUrl.

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request)
    logger.info(f"{admin.username} updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_principal)
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    logger.info(f"{admin.username} deleted company {handle}")
    return {"deleted": handle}
