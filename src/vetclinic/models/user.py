from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from vetclinic.database.base import Base


class User(Base):
    """
    Staff account used to log in. Not exposed through the generic CRUD routes.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(100), nullable=False)

    # Email address (login key, must be unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # bcrypt digest, never the raw password
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r}, email={self.email!r})>"
