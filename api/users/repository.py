"""
User persistence (raw SQL).

Password hashes never leave this module; every projection below omits them
except the one `authenticate()` reads.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from asyncpg import exceptions as pg_exc

from auth import security
from core import db
from core.errors import ConflictError, NotFoundError, UnauthorizedError
from core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'
)

USER_COLUMN_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
}


async def authenticate(username: str, password: str) -> dict:
    """
    Return the user if `password` matches, else raise UnauthorizedError.
    """
    row = await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}, password
        FROM users
        WHERE username = $1
        """,
        username,
    )
    if row is not None and security.verify_password(password, str(row.pop("password") or "")):
        return row
    raise UnauthorizedError("Invalid username/password")


async def create(
    *,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> dict:
    duplicate = await db.fetch_one(
        """
        SELECT username
        FROM users
        WHERE username = $1
        """,
        username,
    )
    if duplicate is not None:
        raise ConflictError(f"Duplicate username: {username}")

    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}
            """,
            username,
            security.hash_password(password),
            first_name,
            last_name,
            email,
            is_admin,
        )
    except pg_exc.UniqueViolationError as exc:
        raise ConflictError(f"Duplicate username: {username}") from exc
    if row is None:
        raise RuntimeError("Failed to create user.")

    logger.info("user_created username=%s is_admin=%s", username, is_admin)
    return row


async def find_all() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        ORDER BY username
        """
    )


async def get(username: str) -> dict:
    """
    Return a user with the ids of the jobs they applied to as `applications`.
    """
    user = await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE username = $1
        """,
        username,
    )
    if user is None:
        raise NotFoundError(f"No user: {username}")

    rows = await db.fetch_all(
        """
        SELECT job_id
        FROM applications
        WHERE username = $1
        ORDER BY job_id
        """,
        username,
    )
    user["applications"] = [row["job_id"] for row in rows]
    return user


async def update(username: str, data: Mapping[str, Any]) -> dict:
    """
    Partial update. A new password is hashed before it is stored.
    """
    data = dict(data)
    if "password" in data:
        data["password"] = security.hash_password(data["password"])

    set_cols = sql_for_partial_update(data, USER_COLUMN_NAMES)
    row = await db.fetch_one(
        f"""
        UPDATE users
        SET {set_cols.sql}
        WHERE username = {set_cols.next_placeholder}
        RETURNING {USER_COLUMNS}
        """,
        *set_cols.values,
        username,
    )
    if row is None:
        raise NotFoundError(f"No user: {username}")

    logger.info("user_updated username=%s fields=%s", username, ",".join(data))
    return row


async def remove(username: str) -> None:
    row = await db.fetch_one(
        """
        DELETE FROM users
        WHERE username = $1
        RETURNING username
        """,
        username,
    )
    if row is None:
        raise NotFoundError(f"No user: {username}")

    logger.info("user_deleted username=%s", username)


async def apply_to_job(username: str, job_id: int) -> None:
    job = await db.fetch_one("SELECT id FROM jobs WHERE id = $1", job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")

    try:
        await db.execute(
            """
            INSERT INTO applications (job_id, username)
            VALUES ($1, $2)
            """,
            job_id,
            username,
        )
    except pg_exc.ForeignKeyViolationError as exc:
        # The job was checked above, so the missing parent is the user.
        raise NotFoundError(f"No user: {username}") from exc
    except pg_exc.UniqueViolationError as exc:
        raise ConflictError(f"Already applied: {username} to job {job_id}") from exc

    logger.info("application_created username=%s job_id=%s", username, job_id)
