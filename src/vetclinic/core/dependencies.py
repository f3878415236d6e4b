"""
FastAPI dependencies.

The engine and session factory live on `app.state` (built once by
`create_app`), so every request borrows a pooled connection through its own
AsyncSession and nothing here reads module-level globals.
"""

from typing import Any, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vetclinic.config.settings import Settings
from vetclinic.core.security import decode_access_token
from vetclinic.exceptions.base import InvalidTokenError
from vetclinic.repositories.table_repository import TableRepository
from vetclinic.repositories.user_repository import UserRepository
from vetclinic.services.auth_service import AuthService
from vetclinic.services.crud_dispatcher import CrudDispatcher

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session and make sure it is closed after the request."""
    async with request.app.state.session_maker() as session:
        yield session


def get_crud_dispatcher(db: AsyncSession = Depends(get_db_session)) -> CrudDispatcher:
    return CrudDispatcher(TableRepository(db))


def get_auth_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(UserRepository(db), settings)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """Claims of a valid `Authorization: Bearer <token>` header, else 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidTokenError("Missing bearer token.")
    return decode_access_token(credentials.credentials, settings)
