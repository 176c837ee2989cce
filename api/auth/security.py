"""
Auth security helpers.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

import bcrypt
import jwt

from core.config import env_int, env_str

from .policy import Principal


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def bcrypt_rounds() -> int:
    return env_int("BCRYPT_ROUNDS", 12)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=bcrypt_rounds())).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, username: str, is_admin: bool) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        "sub": username,
        "username": username,
        "isAdmin": bool(is_admin),
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> Principal:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    username = str(payload.get("username") or "").strip()
    if not username:
        raise AuthSecurityError("Access token has no username.")

    issued_at = payload.get("iat")
    return Principal(
        identifier=username,
        privileged=payload.get("isAdmin") is True,
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc) if isinstance(issued_at, int) else None,
    )
