"""
Auth API endpoints (no token required).
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/auth/token", response_model=schemas.TokenResponse)
async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    return await service.login(payload)


@router.post("/auth/register", response_model=schemas.TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest) -> schemas.TokenResponse:
    return await service.register(payload)
