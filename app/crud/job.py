"""
CRUD operations for jobs.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

from types import MappingProxyType
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.core.sql import FilterRule, contains_ci, execute, sql_for_filters, sql_for_partial_update
from app.schemas.job import JobCreateRequest, JobFilters, JobUpdateRequest

# JSON field name -> column, for fields where they differ.
# companyHandle is not updatable, so it only matters on insert.
JOB_JS_TO_SQL = MappingProxyType({
    "companyHandle": "company_handle",
})

JOB_FILTERS = MappingProxyType({
    "title": FilterRule("LOWER(title) LIKE {} ESCAPE '\\'", contains_ci),
    "minSalary": FilterRule("salary >= {}"),
    "hasEquity": FilterRule("equity > 0", bind=False),
})

_COLUMNS = "id, title, salary, equity, company_handle"


def create(db: Session, job_data: JobCreateRequest) -> dict:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, company_handle} with the generated id

    Raises:
        BadRequestError: If the company does not exist, or it already has a
            job with this title
    """
    company = execute(
        db, "SELECT handle FROM companies WHERE handle = $1", [job_data.company_handle]
    ).first()
    if not company:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    duplicate = execute(
        db,
        "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
        [job_data.title, job_data.company_handle],
    ).first()
    if duplicate:
        raise BadRequestError(f"Duplicate job: {job_data.title} at {job_data.company_handle}")

    fields = job_data.model_dump(mode="json")
    try:
        row = execute(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_COLUMNS}""",
            [fields["title"], fields["salary"], fields["equity"], fields["company_handle"]],
        ).mappings().first()
        job = dict(row)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Could not create job: {e.orig}")

    return job


def find_all(db: Session, filters: Optional[JobFilters] = None) -> List[dict]:
    """
    List jobs ordered by id.

    Args:
        db: Database session
        filters: Optional title / minSalary / hasEquity filters
    """
    where, values = sql_for_filters(filters.to_filters() if filters else {}, JOB_FILTERS)

    sql = f"SELECT {_COLUMNS} FROM jobs"
    if where:
        sql += f" WHERE {where}"
    sql += " ORDER BY id"

    return [dict(row) for row in execute(db, sql, values).mappings().all()]


def get(db: Session, job_id: int) -> dict:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If there is no such job
    """
    row = execute(db, f"SELECT {_COLUMNS} FROM jobs WHERE id = $1", [job_id]).mappings().first()
    if not row:
        raise NotFoundError(f"No job: {job_id}")
    return dict(row)


def update(db: Session, job_id: int, data: JobUpdateRequest) -> dict:
    """
    Partially update a job; only supplied fields change.

    Raises:
        BadRequestError: If no fields were supplied, or the new title is
            already used by another job at the same company
        NotFoundError: If there is no such job
    """
    fields = data.to_update()
    set_cols, values = sql_for_partial_update(fields, JOB_JS_TO_SQL)
    id_idx = len(values) + 1

    if "title" in fields:
        duplicate = execute(
            db,
            """SELECT other.id
               FROM jobs AS other
               JOIN jobs AS target ON target.company_handle = other.company_handle
               WHERE target.id = $1 AND other.title = $2 AND other.id <> $1""",
            [job_id, fields["title"]],
        ).first()
        if duplicate:
            raise BadRequestError(f"Duplicate job: {fields['title']}")

    try:
        row = execute(
            db,
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = ${id_idx}
                RETURNING {_COLUMNS}""",
            [*values, job_id],
        ).mappings().first()
        job = dict(row) if row else None
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Could not update job {job_id}: {e.orig}")

    if not job:
        raise NotFoundError(f"No job: {job_id}")

    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If there is no such job
    """
    row = execute(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]).first()
    db.commit()

    if not row:
        raise NotFoundError(f"No job: {job_id}")
