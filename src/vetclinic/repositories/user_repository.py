"""
User repository: persistence for staff accounts used by the auth endpoints.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vetclinic.exceptions.mapper import db_error_handler
from vetclinic.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, username: str, email: str, hashed_password: str) -> User:
        """
        Create a new user with an already-hashed password.

        Raises:
            StorageError: with the duplicate-record message if the email is taken.
        """
        async with db_error_handler(self.db, User.__tablename__):
            user = User(
                username=username.strip(),           # Remove accidental whitespace
                email=email.strip().lower(),         # Normalize email to lowercase
                hashed_password=hashed_password,
            )
            self.db.add(user)
            await self.db.flush()
            await self.db.refresh(user)

        logger.info("repo.user.created", extra={"id": user.id})
        return user

    async def get_by_email(self, email: str) -> User | None:
        async with db_error_handler(self.db, User.__tablename__):
            result = await self.db.execute(
                select(User).where(User.email == email.strip().lower())
            )
            return result.scalar_one_or_none()

    async def commit(self) -> None:
        async with db_error_handler(self.db, User.__tablename__):
            await self.db.commit()
