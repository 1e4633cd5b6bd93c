import logging
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_principal
from app.core.errors import BadRequestError, format_validation_errors
from app.crud import job as job_crud
from app.schemas.auth import Principal
from app.schemas.base import DeletedResponse
from app.schemas.job import JobCreateRequest, JobEnvelope, JobFilters, JobListResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def job_filters(request: Request) -> JobFilters:
    """Validate the query string; unknown or malformed keys are a 400."""
    try:
        return JobFilters.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(format_validation_errors(e.errors()))


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_principal)
):
    """
    Create a job posting for an existing company.

    Authorization required: admin
    """
    new_job = job_crud.create(db, request)
    logger.info(f"{admin.username} created job {new_job['id']}: {new_job['title']}")
    return {"job": new_job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    filters: JobFilters = Depends(job_filters),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by id.

    Optional filters:
    - title: case-insensitive partial match
    - minSalary: salary at least this much
    - hasEquity: true for jobs with non-zero equity only

    Authorization required: none
    """
    return {"jobs": job_crud.find_all(db, filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_principal)
):
    """
    Partially update a job: any of title, salary, equity.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request)
    logger.info(f"{admin.username} updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: Principal = Depends(get_admin_principal)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"{admin.username} deleted job {job_id}")
    return {"deleted": job_id}
