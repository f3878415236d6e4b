from fastapi import APIRouter

from vetclinic.api.v1.routes.auth import router as auth_router
from vetclinic.api.v1.routes.crud import router as crud_router
from vetclinic.api.v1.routes.health import router as health_router

api_router = APIRouter()

# Fixed paths first: the catch-all "/{table}" routes must not shadow them.
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(crud_router, tags=["crud"])
