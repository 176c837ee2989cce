"""
User API endpoints. Every route requires a token; see `auth/policy.py` for
which ones are admin-only and which are self-scoped.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from auth import service as auth_service

from . import repository, schemas

router = APIRouter(dependencies=[Depends(auth_dependencies.ensure_logged_in)])


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(payload: schemas.UserNew) -> dict:
    """
    Admin-created account (may be an admin). Returns the user and a token.
    """
    user = await repository.create(**payload.model_dump())
    return {"user": user, "token": auth_service.token_for_user(user)}


@router.get("/users")
async def list_users() -> dict:
    users = await repository.find_all()
    return {"users": users}


@router.get("/users/{username}")
async def get_user(username: str) -> dict:
    user = await repository.get(username)
    return {"user": user}


@router.patch("/users/{username}")
async def update_user(username: str, payload: schemas.UserUpdate) -> dict:
    user = await repository.update(username, payload.model_dump(by_alias=True, exclude_unset=True))
    return {"user": user}


@router.delete("/users/{username}")
async def delete_user(username: str) -> dict:
    await repository.remove(username)
    return {"deleted": username}


@router.post("/users/{username}/jobs/{job_id}")
async def apply_to_job(username: str, job_id: int) -> dict:
    await repository.apply_to_job(username, job_id)
    return {"applied": job_id}
