import logging
from typing import Any

from sqlalchemy.orm import Session

from db.sql import sql_for_partial_update
from db.store import run_query
from errors import NotFoundError

logger = logging.getLogger(__name__)

_JOB_COLUMNS = "id, title, salary, equity, company_handle"


def _job_row(row: dict) -> dict:
    # Numeric comes back as Decimal, float or int depending on the driver.
    job = dict(row)
    if job.get("equity") is not None:
        job["equity"] = str(job["equity"])
    return job


def create_job(db: Session, data: dict[str, Any]) -> dict:
    """
    Insert a job and return it with its new id.

    data should be { title, salary, equity, company_handle }; salary and
    equity may be missing. Constraint violations surface as store errors.
    """
    rows = run_query(
        db,
        f"""
        INSERT INTO jobs (title, salary, equity, company_handle)
        VALUES ($1, $2, $3, $4)
        RETURNING {_JOB_COLUMNS}
        """,
        [
            data.get("title"),
            data.get("salary"),
            data.get("equity"),
            data.get("company_handle"),
        ],
    )
    job = _job_row(rows[0])
    logger.info("Created job %s for company %s", job["id"], job["company_handle"])
    return job


def build_job_filters(
    title: str | None = None,
    min_salary: int | None = None,
    has_equity: bool | None = None,
) -> tuple[list[str], list[Any]]:
    """
    Build the WHERE predicates for ``find_all_jobs`` and their bound values.

    Each predicate that takes a value is numbered from the length of the
    values list right after the value is appended, so placeholders and
    values never drift apart. has_equity adds no value.
    """
    where_parts: list[str] = []
    params: list[Any] = []

    if min_salary is not None:
        params.append(min_salary)
        where_parts.append(f"j.salary >= ${len(params)}")

    if has_equity is True:
        where_parts.append("j.equity > 0")

    if title is not None:
        params.append(f"%{title}%")
        where_parts.append(f"LOWER(j.title) LIKE LOWER(${len(params)})")

    return where_parts, params


def find_all_jobs(
    db: Session,
    title: str | None = None,
    min_salary: int | None = None,
    has_equity: bool | None = None,
) -> list[dict]:
    """
    List jobs ordered by title, optionally filtered.

    Filters (all optional, combined with AND):
    - title: case-insensitive substring match
    - min_salary: salary at least this much
    - has_equity: when True, only jobs with a non-zero equity

    Returns [{ id, title, salary, equity, company_handle, company_name }, ...]
    """
    where_parts, params = build_job_filters(
        title=title, min_salary=min_salary, has_equity=has_equity
    )
    where_clause = f"WHERE {' AND '.join(where_parts)}" if where_parts else ""

    rows = run_query(
        db,
        f"""
        SELECT j.id,
               j.title,
               j.salary,
               j.equity,
               j.company_handle,
               c.name AS company_name
        FROM jobs AS j
        LEFT JOIN companies AS c ON c.handle = j.company_handle
        {where_clause}
        ORDER BY j.title
        """,
        params,
    )
    return [_job_row(row) for row in rows]


def get_job(db: Session, job_id: int) -> dict:
    """
    Fetch one job with its company embedded.

    Returns { id, title, salary, equity, company } where company is
    { handle, name, description, num_employees, logo_url }, or None if the
    company row is gone.

    Raises NotFoundError if no job has this id.
    """
    rows = run_query(
        db,
        f"""
        SELECT {_JOB_COLUMNS}
        FROM jobs
        WHERE id = $1
        """,
        [job_id],
    )
    if not rows:
        logger.warning("Job %s not found", job_id)
        raise NotFoundError(f"No job: {job_id}")

    job = _job_row(rows[0])
    company_rows = run_query(
        db,
        """
        SELECT handle,
               name,
               description,
               num_employees,
               logo_url
        FROM companies
        WHERE handle = $1
        """,
        [job.pop("company_handle")],
    )
    job["company"] = company_rows[0] if company_rows else None
    return job


def update_job(db: Session, job_id: int, data: dict[str, Any]) -> dict:
    """
    Apply a partial update to a job.

    Only the fields present in data are written. Field names are used as
    column names; callers are expected to pass only title, salary and equity.

    Returns { id, title, salary, equity, company_handle }

    Raises BadRequestError if data is empty, NotFoundError if no job has this id.
    """
    set_cols, values = sql_for_partial_update(data, {})
    id_index = len(values) + 1

    rows = run_query(
        db,
        f"""
        UPDATE jobs
        SET {set_cols}
        WHERE id = ${id_index}
        RETURNING {_JOB_COLUMNS}
        """,
        [*values, job_id],
    )
    if not rows:
        logger.warning("Job %s not found for update", job_id)
        raise NotFoundError(f"No job: {job_id}")

    logger.info("Updated job %s (%s)", job_id, ", ".join(data))
    return _job_row(rows[0])


def remove_job(db: Session, job_id: int) -> None:
    """Delete a job. Raises NotFoundError if no job has this id."""
    rows = run_query(
        db,
        """
        DELETE FROM jobs
        WHERE id = $1
        RETURNING id
        """,
        [job_id],
    )
    if not rows:
        logger.warning("Job %s not found for removal", job_id)
        raise NotFoundError(f"No job: {job_id}")

    logger.info("Removed job %s", job_id)
