from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from vetclinic.database.base import Base


class Tutor(Base):
    """A pet's owner / guardian."""
    __tablename__ = "tutors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Tutor(id={self.id!r}, name={self.name!r})>"
