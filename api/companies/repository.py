"""
Company persistence (raw SQL).

Rows are projected with camelCase aliases so they can be returned to
clients as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from asyncpg import exceptions as pg_exc

from core import db
from core.errors import ConflictError, NotFoundError
from core.sql import AT_LEAST, AT_MOST, CONTAINS, Criterion, build_where_clause, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

COMPANY_FILTERS: tuple[Criterion, ...] = (
    Criterion("name", "name", CONTAINS),
    Criterion("minEmployees", "num_employees", AT_LEAST),
    Criterion("maxEmployees", "num_employees", AT_MOST),
)

COMPANY_COLUMN_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


async def create(
    *,
    handle: str,
    name: str,
    description: str,
    num_employees: int | None = None,
    logo_url: str | None = None,
) -> dict:
    """
    Insert a company. Raises ConflictError if the handle is taken.
    """
    duplicate = await db.fetch_one(
        """
        SELECT handle
        FROM companies
        WHERE handle = $1
        """,
        handle,
    )
    if duplicate is not None:
        raise ConflictError(f"Duplicate company: {handle}")

    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}
            """,
            handle,
            name,
            description,
            num_employees,
            logo_url,
        )
    except pg_exc.UniqueViolationError as exc:
        raise ConflictError(f"Duplicate company: {handle}") from exc
    if row is None:
        raise RuntimeError("Failed to create company.")

    logger.info("company_created handle=%s", handle)
    return row


async def find_all(filters: Mapping[str, Any] | None = None) -> list[dict]:
    """
    List companies, optionally filtered by:
    - name: case-insensitive substring ("net" finds "Study Network")
    - minEmployees / maxEmployees: inclusive bounds

    An inconsistent range simply matches nothing.
    """
    where = build_where_clause(filters or {}, COMPANY_FILTERS)
    return await db.fetch_all(
        f"""
        SELECT {COMPANY_COLUMNS}
        FROM companies{where.sql}
        ORDER BY name
        """,
        *where.values,
    )


async def get(handle: str) -> dict:
    """
    Return a company with its jobs attached as `jobs`.
    """
    company = await db.fetch_one(
        f"""
        SELECT {COMPANY_COLUMNS}
        FROM companies
        WHERE handle = $1
        """,
        handle,
    )
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    company["jobs"] = await db.fetch_all(
        """
        SELECT id, title, salary, equity
        FROM jobs
        WHERE company_handle = $1
        ORDER BY id
        """,
        handle,
    )
    return company


async def update(handle: str, data: Mapping[str, Any]) -> dict:
    """
    Partial update; only the keys present in `data` change.

    `data` uses external names (numEmployees, logoUrl, ...) and must already
    be restricted to CompanyUpdate fields.
    """
    set_cols = sql_for_partial_update(data, COMPANY_COLUMN_NAMES)
    try:
        row = await db.fetch_one(
            f"""
            UPDATE companies
            SET {set_cols.sql}
            WHERE handle = {set_cols.next_placeholder}
            RETURNING {COMPANY_COLUMNS}
            """,
            *set_cols.values,
            handle,
        )
    except pg_exc.UniqueViolationError as exc:
        raise ConflictError(f"Duplicate company name: {data.get('name')}") from exc
    if row is None:
        raise NotFoundError(f"No company: {handle}")

    logger.info("company_updated handle=%s fields=%s", handle, ",".join(data))
    return row


async def remove(handle: str) -> None:
    row = await db.fetch_one(
        """
        DELETE FROM companies
        WHERE handle = $1
        RETURNING handle
        """,
        handle,
    )
    if row is None:
        raise NotFoundError(f"No company: {handle}")

    logger.info("company_deleted handle=%s", handle)
