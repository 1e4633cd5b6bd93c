"""
CRUD operations for companies.

Rows come back as plain dicts with storage column names (num_employees,
logo_url); the API schemas take care of the camelCase JSON names.
"""

from types import MappingProxyType
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.core.sql import FilterRule, contains_ci, execute, sql_for_filters, sql_for_partial_update
from app.schemas.company import CompanyCreateRequest, CompanyFilters, CompanyUpdateRequest

# JSON field name -> column, for fields where they differ
COMPANY_JS_TO_SQL = MappingProxyType({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

COMPANY_FILTERS = MappingProxyType({
    "name": FilterRule("LOWER(name) LIKE {} ESCAPE '\\'", contains_ci),
    "minEmployees": FilterRule("num_employees >= {}"),
    "maxEmployees": FilterRule("num_employees <= {}"),
})

COMPANY_RANGES = (("minEmployees", "maxEmployees"),)

_COLUMNS = "handle, name, description, num_employees, logo_url"


def create(db: Session, data: CompanyCreateRequest) -> dict:
    """
    Create a company.

    Returns:
        {handle, name, description, num_employees, logo_url}

    Raises:
        BadRequestError: If the handle is already taken
    """
    duplicate = execute(db, "SELECT handle FROM companies WHERE handle = $1", [data.handle]).first()
    if duplicate:
        raise BadRequestError(f"Duplicate company: {data.handle}")

    try:
        row = execute(
            db,
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_COLUMNS}""",
            [data.handle, data.name, data.description, data.num_employees, data.logo_url],
        ).mappings().first()
        company = dict(row)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Could not create company {data.handle}: {e.orig}")

    return company


def find_all(db: Session, filters: Optional[CompanyFilters] = None) -> List[dict]:
    """
    List companies ordered by name.

    Args:
        db: Database session
        filters: Optional name / minEmployees / maxEmployees filters

    Raises:
        BadRequestError: If minEmployees > maxEmployees
    """
    where, values = sql_for_filters(
        filters.to_filters() if filters else {},
        COMPANY_FILTERS,
        ranges=COMPANY_RANGES,
    )

    sql = f"SELECT {_COLUMNS} FROM companies"
    if where:
        sql += f" WHERE {where}"
    sql += " ORDER BY name"

    return [dict(row) for row in execute(db, sql, values).mappings().all()]


def get(db: Session, handle: str) -> dict:
    """
    Get a company with its jobs.

    Returns:
        {handle, name, description, num_employees, logo_url, jobs}
        where jobs is [{id, title, salary, equity}, ...] ordered by id

    Raises:
        NotFoundError: If there is no such company
    """
    row = execute(db, f"SELECT {_COLUMNS} FROM companies WHERE handle = $1", [handle]).mappings().first()
    if not row:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    jobs = execute(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    ).mappings().all()
    company["jobs"] = [dict(job) for job in jobs]

    return company


def update(db: Session, handle: str, data: CompanyUpdateRequest) -> dict:
    """
    Partially update a company; only supplied fields change.

    Raises:
        BadRequestError: If no fields were supplied
        NotFoundError: If there is no such company
    """
    set_cols, values = sql_for_partial_update(data.to_update(), COMPANY_JS_TO_SQL)
    handle_idx = len(values) + 1

    try:
        row = execute(
            db,
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {_COLUMNS}""",
            [*values, handle],
        ).mappings().first()
        company = dict(row) if row else None
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Could not update company {handle}: {e.orig}")

    if not company:
        raise NotFoundError(f"No company: {handle}")

    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If there is no such company
    """
    row = execute(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle]).first()
    db.commit()

    if not row:
        raise NotFoundError(f"No company: {handle}")
