"""
Pydantic schemas for user endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: str = Field(..., min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")
    is_admin: bool = Field(default=False, alias="isAdmin")


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    password: str | None = Field(default=None, min_length=5, max_length=128)
    first_name: str | None = Field(default=None, min_length=1, max_length=30, alias="firstName")
    last_name: str | None = Field(default=None, min_length=1, max_length=30, alias="lastName")
    email: str | None = Field(default=None, min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")

    @field_validator("password", "first_name", "last_name", "email")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("may not be null")
        return value
