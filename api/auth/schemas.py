"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: str = Field(..., min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    token: str
