"""
Job persistence (raw SQL).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping

from asyncpg import exceptions as pg_exc

from core import db
from core.errors import ConflictError, NotFoundError
from core.sql import AT_LEAST, CONTAINS, POSITIVE, Criterion, build_where_clause, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# hasEquity adds a predicate but no bind value; later placeholders are
# numbered from the value count, not the predicate count.
JOB_FILTERS: tuple[Criterion, ...] = (
    Criterion("title", "title", CONTAINS),
    Criterion("minSalary", "salary", AT_LEAST),
    Criterion("hasEquity", "equity", POSITIVE),
)


async def create(
    *,
    title: str,
    company_handle: str,
    salary: int | None = None,
    equity: Decimal | None = None,
) -> dict:
    """
    Insert a job.

    Raises ConflictError if the company already has a job with this title,
    NotFoundError if the company does not exist.
    """
    duplicate = await db.fetch_one(
        """
        SELECT id
        FROM jobs
        WHERE title = $1
          AND company_handle = $2
        """,
        title,
        company_handle,
    )
    if duplicate is not None:
        raise ConflictError(f"Duplicate job: {title} at {company_handle}")

    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}
            """,
            title,
            salary,
            equity,
            company_handle,
        )
    except pg_exc.ForeignKeyViolationError as exc:
        raise NotFoundError(f"No company: {company_handle}") from exc
    except pg_exc.UniqueViolationError as exc:
        raise ConflictError(f"Duplicate job: {title} at {company_handle}") from exc
    if row is None:
        raise RuntimeError("Failed to create job.")

    logger.info("job_created id=%s company_handle=%s", row["id"], company_handle)
    return row


async def find_all(filters: Mapping[str, Any] | None = None) -> list[dict]:
    """
    List jobs, optionally filtered by:
    - title: case-insensitive substring
    - minSalary: inclusive lower bound
    - hasEquity: when true, only jobs with equity > 0
    """
    where = build_where_clause(filters or {}, JOB_FILTERS)
    return await db.fetch_all(
        f"""
        SELECT {JOB_COLUMNS}
        FROM jobs{where.sql}
        ORDER BY title
        """,
        *where.values,
    )


async def get(job_id: int) -> dict:
    row = await db.fetch_one(
        f"""
        SELECT {JOB_COLUMNS}
        FROM jobs
        WHERE id = $1
        """,
        job_id,
    )
    if row is None:
        raise NotFoundError(f"No job: {job_id}")
    return row


async def update(job_id: int, data: Mapping[str, Any]) -> dict:
    """
    Partial update of title / salary / equity.
    """
    set_cols = sql_for_partial_update(data)
    try:
        row = await db.fetch_one(
            f"""
            UPDATE jobs
            SET {set_cols.sql}
            WHERE id = {set_cols.next_placeholder}
            RETURNING {JOB_COLUMNS}
            """,
            *set_cols.values,
            job_id,
        )
    except pg_exc.UniqueViolationError as exc:
        raise ConflictError(f"Duplicate job title for job {job_id}: {data.get('title')}") from exc
    if row is None:
        raise NotFoundError(f"No job: {job_id}")

    logger.info("job_updated id=%s fields=%s", job_id, ",".join(data))
    return row


async def remove(job_id: int) -> None:
    row = await db.fetch_one(
        """
        DELETE FROM jobs
        WHERE id = $1
        RETURNING id
        """,
        job_id,
    )
    if row is None:
        raise NotFoundError(f"No job: {job_id}")

    logger.info("job_deleted id=%s", job_id)
