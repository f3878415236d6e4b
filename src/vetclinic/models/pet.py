from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from vetclinic.database.base import Base


class Pet(Base):
    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    species: Mapped[str | None] = mapped_column(Text)
    breed: Mapped[str | None] = mapped_column(Text)
    age: Mapped[int | None] = mapped_column(Integer)

    # Deleting a tutor removes their pets
    tutor_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tutors.id", ondelete="CASCADE")
    )

    def __repr__(self) -> str:
        return f"<Pet(id={self.id!r}, name={self.name!r}, tutor_id={self.tutor_id!r})>"
