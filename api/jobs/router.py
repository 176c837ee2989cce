"""
Job API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies

from . import repository, schemas

router = APIRouter()


@router.post("/jobs", status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: schemas.JobNew,
    _: object = Depends(auth_dependencies.ensure_logged_in),
) -> dict:
    job = await repository.create(**payload.model_dump())
    return {"job": job}


@router.get("/jobs")
async def list_jobs(
    title: str | None = Query(default=None, min_length=1),
    min_salary: int | None = Query(default=None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(default=None, alias="hasEquity"),
) -> dict:
    """
    List jobs. No auth required.
    """
    jobs = await repository.find_all({"title": title, "minSalary": min_salary, "hasEquity": has_equity})
    return {"jobs": jobs}


@router.get("/jobs/{job_id}")
async def get_job(job_id: int) -> dict:
    job = await repository.get(job_id)
    return {"job": job}


@router.patch("/jobs/{job_id}")
async def update_job(
    job_id: int,
    payload: schemas.JobUpdate,
    _: object = Depends(auth_dependencies.ensure_logged_in),
) -> dict:
    job = await repository.update(job_id, payload.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/jobs/{job_id}")
async def delete_job(
    job_id: int,
    _: object = Depends(auth_dependencies.ensure_logged_in),
) -> dict:
    await repository.remove(job_id)
    return {"deleted": job_id}
