"""
Pydantic schemas for company endpoints.

Field aliases are the external (JSON) names; repositories receive payloads
dumped with `by_alias=True`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9_-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: int | None = Field(default=None, ge=0, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl")


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        # Omitted means unchanged; an explicit null is rejected.
        if value is None:
            raise ValueError("may not be null")
        return value
