from __future__ import annotations

import asyncio

import pytest
from asyncpg import exceptions as pg_exc

from auth import security
from core.errors import ConflictError, NotFoundError, UnauthorizedError
from users import repository

U1 = {"username": "u1", "firstName": "U1F", "lastName": "U1L", "email": "u1@email.com", "isAdmin": False}


def test_create_hashes_password(fake_db) -> None:
    fake_db.queue(None, dict(U1))

    user = asyncio.run(
        repository.create(username="u1", password="password1", first_name="U1F", last_name="U1L", email="u1@email.com")
    )

    assert user == U1
    stored_hash = fake_db.calls[1][2][1]
    assert stored_hash != "password1"
    assert security.verify_password("password1", stored_hash)


def test_create_duplicate_raises_conflict(fake_db) -> None:
    fake_db.queue({"username": "u1"})

    with pytest.raises(ConflictError):
        asyncio.run(
            repository.create(username="u1", password="password1", first_name="a", last_name="b", email="u1@e.com")
        )
    assert len(fake_db.calls) == 1


def test_authenticate_strips_password(fake_db) -> None:
    fake_db.queue({**U1, "password": security.hash_password("password1")})

    user = asyncio.run(repository.authenticate("u1", "password1"))

    assert user == U1


def test_authenticate_wrong_password(fake_db) -> None:
    fake_db.queue({**U1, "password": security.hash_password("password1")})

    with pytest.raises(UnauthorizedError):
        asyncio.run(repository.authenticate("u1", "wrong"))


def test_authenticate_unknown_user(fake_db) -> None:
    with pytest.raises(UnauthorizedError):
        asyncio.run(repository.authenticate("nope", "password1"))


def test_get_attaches_applications(fake_db) -> None:
    fake_db.queue(dict(U1), [{"job_id": 1}, {"job_id": 3}])

    user = asyncio.run(repository.get("u1"))

    assert user["applications"] == [1, 3]


def test_update_translates_and_hashes(fake_db) -> None:
    fake_db.queue({**U1, "firstName": "New"})

    asyncio.run(repository.update("u1", {"firstName": "New", "password": "new-password"}))

    assert 'SET "first_name"=$1, "password"=$2 WHERE username = $3' in fake_db.statements[0]
    args = fake_db.calls[0][2]
    assert args[0] == "New"
    assert security.verify_password("new-password", args[1])
    assert args[2] == "u1"


def test_remove_missing_raises_not_found(fake_db) -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(repository.remove("nope"))


def test_apply_to_missing_job(fake_db) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        asyncio.run(repository.apply_to_job("u1", 0))

    assert exc_info.value.detail == "No job: 0"
    assert len(fake_db.calls) == 1


def test_apply_twice_is_conflict(fake_db) -> None:
    fake_db.queue({"id": 1}, pg_exc.UniqueViolationError("duplicate key"))

    with pytest.raises(ConflictError):
        asyncio.run(repository.apply_to_job("u1", 1))
