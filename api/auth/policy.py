"""
Authorization decisions for protected routes.

`authorize()` is a pure function of the verified principal and the request
shape. It returns a `Decision` instead of raising, and the FastAPI dependency
in `auth/dependencies.py` turns a denial into the matching error.

Tiers:
- anonymous: no principal -> UNAUTHENTICATED on every protected route
- privileged: routes listed in PRIVILEGED_ACTIONS require `privileged`
- self: every other protected route requires the `{username}` path segment
  to equal the principal's identifier
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Principal:
    identifier: str
    privileged: bool
    issued_at: datetime | None = None


class Decision(str, Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class RouteRule:
    method: str
    prefix: str
    description: str

    def matches(self, method: str, path: str) -> bool:
        return self.method == method.upper() and path.startswith(self.prefix)


# Matched against the full request path with a literal prefix test. "/" takes
# every POST and "/user" every GET under /users; the ":" entries are route
# templates and never equal a real path.
# TODO: replace the ":" entries with segment-aware patterns once the
# fallthrough for /companies/{handle} and /jobs/{id} writes is signed off.
PRIVILEGED_ACTIONS: tuple[RouteRule, ...] = (
    RouteRule("POST", "/", "create company"),
    RouteRule("PATCH", "/:handle", "update company"),
    RouteRule("DELETE", "/:handle", "delete company"),
    RouteRule("POST", "/user", "create user"),
    RouteRule("GET", "/users", "list users"),
    RouteRule("GET", "/:username", "get user"),
    RouteRule("PATCH", "/:username", "update user"),
    RouteRule("DELETE", "/:username", "delete user"),
)


def privileged_rule_for(method: str, path: str) -> RouteRule | None:
    for rule in PRIVILEGED_ACTIONS:
        if rule.matches(method, path):
            return rule
    return None


def authorize(
    principal: Principal | None,
    method: str,
    path: str,
    *,
    username: str | None = None,
) -> Decision:
    """
    Decide whether `principal` may call `method path`.

    `username` is the route's `{username}` parameter, or None when the route
    has no such segment (which never matches a principal).
    """
    if principal is None:
        return Decision.UNAUTHENTICATED

    if privileged_rule_for(method, path) is not None:
        return Decision.ALLOW if principal.privileged else Decision.FORBIDDEN

    if username is None or username != principal.identifier:
        return Decision.FORBIDDEN
    return Decision.ALLOW
