"""
Company API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import repository, schemas

router = APIRouter()


@router.post("/companies", status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: schemas.CompanyNew,
    _: object = Depends(auth_dependencies.ensure_logged_in),
) -> dict:
    company = await repository.create(**payload.model_dump())
    return {"company": company}


@router.get("/companies")
async def list_companies(
    name: str | None = Query(default=None, min_length=1),
    min_employees: int | None = Query(default=None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(default=None, alias="maxEmployees", ge=0),
) -> dict:
    """
    List companies. No auth required.
    """
    companies = await repository.find_all(
        {"name": name, "minEmployees": min_employees, "maxEmployees": max_employees}
    )
    return {"companies": companies}


@router.get("/companies/{handle}")
async def get_company(handle: str) -> dict:
    company = await repository.get(handle)
    return {"company": company}


@router.patch("/companies/{handle}")
async def update_company(
    handle: str,
    payload: schemas.CompanyUpdate,
    _: object = Depends(auth_dependencies.ensure_logged_in),
) -> dict:
    company = await repository.update(handle, payload.model_dump(by_alias=True, exclude_unset=True))
    return {"company": company}


@router.delete("/companies/{handle}")
async def delete_company(
    handle: str,
    _: object = Depends(auth_dependencies.ensure_logged_in),
) -> dict:
    await repository.remove(handle)
    return {"deleted": handle}
