"""
Classified failures raised by repositories and auth dependencies.

The HTTP layer maps each class to its `status_code` (see `api/main.py`);
everything below the routers only decides which class applies and puts the
offending key into the message.
"""

from __future__ import annotations


class AppError(Exception):
    status_code = 500

    def __init__(self, detail: str | list[str]) -> None:
        super().__init__(detail)
        self.detail = detail


class BadRequestError(AppError):
    status_code = 400


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409
