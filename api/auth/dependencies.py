"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, Request

from core.errors import ForbiddenError, UnauthorizedError

from . import policy, security

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    if not raw:
        return None

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        return None

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        return None
    return token


async def get_principal(authorization: str | None = Header(default=None)) -> policy.Principal | None:
    """
    Verify the bearer token if one was sent.

    A missing or invalid token is not an error here; it just means the
    request is anonymous. Protected routes decide what that implies.
    """
    token = _extract_bearer_token(authorization)
    if token is None:
        return None
    try:
        return security.decode_access_token(token)
    except security.AuthSecurityError as exc:
        logger.debug("token_rejected reason=%s", exc)
        return None


async def ensure_logged_in(
    request: Request,
    principal: policy.Principal | None = Depends(get_principal),
) -> policy.Principal:
    decision = policy.authorize(
        principal,
        request.method,
        request.url.path,
        username=request.path_params.get("username"),
    )
    if decision is policy.Decision.ALLOW:
        return principal

    logger.info(
        "authorization_denied decision=%s method=%s path=%s principal=%s",
        decision.value,
        request.method,
        request.url.path,
        principal.identifier if principal else None,
    )
    if decision is policy.Decision.UNAUTHENTICATED:
        raise UnauthorizedError("Authentication required")
    if policy.privileged_rule_for(request.method, request.url.path) is not None:
        raise ForbiddenError("Admin privileges required")
    raise ForbiddenError("You do not have permission to perform this action.")
