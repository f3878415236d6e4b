"""
Register / login on top of UserRepository and core.security.

Login keeps "email not found" and "wrong password" as separate failures, both
HTTP 400, so the client can tell the user which one to fix.
"""

import logging

from vetclinic.config.settings import Settings
from vetclinic.core.security import create_access_token, hash_password, verify_password
from vetclinic.exceptions.base import EmailNotFoundError, WrongPasswordError
from vetclinic.repositories.user_repository import UserRepository
from vetclinic.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserPublic

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.settings = settings

    async def register(self, data: RegisterRequest) -> RegisterResponse:
        hashed = await hash_password(data.password, self.settings.BCRYPT_ROUNDS)
        user = await self.users.create_user(data.username, data.email, hashed)
        await self.users.commit()

        logger.info("auth.register.success", extra={"user_id": user.id})
        return RegisterResponse(user=UserPublic.model_validate(user))

    async def login(self, data: LoginRequest) -> LoginResponse:
        user = await self.users.get_by_email(data.email)
        if user is None:
            logger.info("auth.login.email_not_found")
            raise EmailNotFoundError()

        if not await verify_password(data.password, user.hashed_password):
            logger.info("auth.login.wrong_password", extra={"user_id": user.id})
            raise WrongPasswordError()

        token = create_access_token({"id": user.id, "username": user.username}, self.settings)
        logger.info("auth.login.success", extra={"user_id": user.id})
        return LoginResponse(token=token, user=UserPublic.model_validate(user))
