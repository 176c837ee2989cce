"""
Pydantic schemas for job endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(..., min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")


class JobUpdate(BaseModel):
    # companyHandle is fixed once a job exists.
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: Decimal | None = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("may not be null")
        return value
