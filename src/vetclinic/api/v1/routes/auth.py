from typing import Any

from fastapi import APIRouter, Depends

from vetclinic.core.dependencies import get_auth_service, get_current_claims
from vetclinic.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from vetclinic.schemas.envelope import Envelope, success
from vetclinic.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse)
async def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return await service.register(payload)


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return await service.login(payload)


@router.get("/me", response_model=Envelope)
async def me(claims: dict[str, Any] = Depends(get_current_claims)):
    return success(
        {"id": claims.get("id"), "username": claims.get("username")},
        "Token is valid.",
    )
