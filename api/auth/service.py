"""
Auth business logic: turn credentials into access tokens.
"""

from __future__ import annotations

import logging

from users import repository as user_repository

from . import schemas, security

logger = logging.getLogger(__name__)


def _token_for(user_row: dict) -> schemas.TokenResponse:
    token = security.build_access_token(
        username=str(user_row["username"]),
        is_admin=bool(user_row.get("isAdmin", False)),
    )
    return schemas.TokenResponse(token=token)


async def register(payload: schemas.RegisterRequest) -> schemas.TokenResponse:
    # Self-registration never grants admin.
    user_row = await user_repository.create(**payload.model_dump(), is_admin=False)
    return _token_for(user_row)


async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    user_row = await user_repository.authenticate(payload.username, payload.password)
    logger.info("login_succeeded username=%s", payload.username)
    return _token_for(user_row)


def token_for_user(user_row: dict) -> str:
    return _token_for(user_row).token
